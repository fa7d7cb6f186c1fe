"""Bundled large-cap US universe.

Finnhub's free tier has no usable symbol listing, so its adapter serves this
fixed list of S&P 500 heavyweights instead. Rows are
``(symbol, name, exchange, sector, industry)``.
"""

from __future__ import annotations

from quotescore.models.ticker import Ticker

SP500_LARGE_CAPS: tuple[tuple[str, str, str, str, str], ...] = (
    ("AAPL", "Apple Inc.", "NASDAQ", "Technology", "Consumer Electronics"),
    ("MSFT", "Microsoft Corporation", "NASDAQ", "Technology", "Software"),
    ("GOOGL", "Alphabet Inc.", "NASDAQ", "Technology", "Internet Services"),
    ("AMZN", "Amazon.com Inc.", "NASDAQ", "Consumer Cyclical", "E-Commerce"),
    ("NVDA", "NVIDIA Corporation", "NASDAQ", "Technology", "Semiconductors"),
    ("META", "Meta Platforms Inc.", "NASDAQ", "Technology", "Social Media"),
    ("TSLA", "Tesla Inc.", "NASDAQ", "Consumer Cyclical", "Auto Manufacturers"),
    ("BRK.B", "Berkshire Hathaway Inc.", "NYSE", "Financial Services", "Insurance"),
    ("JPM", "JPMorgan Chase & Co.", "NYSE", "Financial Services", "Banks"),
    ("V", "Visa Inc.", "NYSE", "Financial Services", "Credit Services"),
    ("UNH", "UnitedHealth Group Inc.", "NYSE", "Healthcare", "Healthcare Plans"),
    ("XOM", "Exxon Mobil Corporation", "NYSE", "Energy", "Oil & Gas"),
    ("JNJ", "Johnson & Johnson", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("WMT", "Walmart Inc.", "NYSE", "Consumer Defensive", "Retail"),
    ("MA", "Mastercard Inc.", "NYSE", "Financial Services", "Credit Services"),
    ("PG", "Procter & Gamble Co.", "NYSE", "Consumer Defensive", "Household Products"),
    ("HD", "Home Depot Inc.", "NYSE", "Consumer Cyclical", "Home Improvement"),
    ("CVX", "Chevron Corporation", "NYSE", "Energy", "Oil & Gas"),
    ("ABBV", "AbbVie Inc.", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("MRK", "Merck & Co. Inc.", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("KO", "Coca-Cola Company", "NYSE", "Consumer Defensive", "Beverages"),
    ("PEP", "PepsiCo Inc.", "NASDAQ", "Consumer Defensive", "Beverages"),
    ("COST", "Costco Wholesale Corp.", "NASDAQ", "Consumer Defensive", "Retail"),
    ("AVGO", "Broadcom Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("LLY", "Eli Lilly and Company", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("ADBE", "Adobe Inc.", "NASDAQ", "Technology", "Software"),
    ("TMO", "Thermo Fisher Scientific", "NYSE", "Healthcare", "Diagnostics"),
    ("CSCO", "Cisco Systems Inc.", "NASDAQ", "Technology", "Networking"),
    ("PFE", "Pfizer Inc.", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("CRM", "Salesforce Inc.", "NYSE", "Technology", "Software"),
    ("ACN", "Accenture plc", "NYSE", "Technology", "IT Services"),
    ("NFLX", "Netflix Inc.", "NASDAQ", "Communication Services", "Entertainment"),
    ("AMD", "Advanced Micro Devices", "NASDAQ", "Technology", "Semiconductors"),
    ("ORCL", "Oracle Corporation", "NYSE", "Technology", "Software"),
    ("INTC", "Intel Corporation", "NASDAQ", "Technology", "Semiconductors"),
    ("DIS", "Walt Disney Company", "NYSE", "Communication Services", "Entertainment"),
    ("ABT", "Abbott Laboratories", "NYSE", "Healthcare", "Medical Devices"),
    ("VZ", "Verizon Communications", "NYSE", "Communication Services", "Telecom"),
    ("NKE", "Nike Inc.", "NYSE", "Consumer Cyclical", "Footwear"),
    ("TXN", "Texas Instruments Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("QCOM", "QUALCOMM Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("DHR", "Danaher Corporation", "NYSE", "Healthcare", "Diagnostics"),
    ("PM", "Philip Morris International", "NYSE", "Consumer Defensive", "Tobacco"),
    ("T", "AT&T Inc.", "NYSE", "Communication Services", "Telecom"),
    ("NEE", "NextEra Energy Inc.", "NYSE", "Utilities", "Utilities"),
    ("CMCSA", "Comcast Corporation", "NASDAQ", "Communication Services", "Media"),
    ("UPS", "United Parcel Service", "NYSE", "Industrials", "Logistics"),
    ("IBM", "International Business Machines", "NYSE", "Technology", "IT Services"),
    ("SPGI", "S&P Global Inc.", "NYSE", "Financial Services", "Financial Data"),
    ("BA", "Boeing Company", "NYSE", "Industrials", "Aerospace"),
    ("GE", "General Electric Company", "NYSE", "Industrials", "Conglomerate"),
    ("CAT", "Caterpillar Inc.", "NYSE", "Industrials", "Machinery"),
    ("HON", "Honeywell International", "NASDAQ", "Industrials", "Conglomerate"),
    ("AMGN", "Amgen Inc.", "NASDAQ", "Healthcare", "Biotechnology"),
    ("LOW", "Lowe's Companies Inc.", "NYSE", "Consumer Cyclical", "Home Improvement"),
    ("RTX", "RTX Corporation", "NYSE", "Industrials", "Aerospace"),
    ("GS", "Goldman Sachs Group", "NYSE", "Financial Services", "Investment Banking"),
    ("BLK", "BlackRock Inc.", "NYSE", "Financial Services", "Asset Management"),
    ("MS", "Morgan Stanley", "NYSE", "Financial Services", "Investment Banking"),
    ("ISRG", "Intuitive Surgical Inc.", "NASDAQ", "Healthcare", "Medical Devices"),
    ("MDT", "Medtronic plc", "NYSE", "Healthcare", "Medical Devices"),
    ("AXP", "American Express Company", "NYSE", "Financial Services", "Credit Services"),
    ("BKNG", "Booking Holdings Inc.", "NASDAQ", "Consumer Cyclical", "Travel"),
    ("GILD", "Gilead Sciences Inc.", "NASDAQ", "Healthcare", "Biotechnology"),
    ("NOW", "ServiceNow Inc.", "NYSE", "Technology", "Software"),
    ("INTU", "Intuit Inc.", "NASDAQ", "Technology", "Software"),
    ("MO", "Altria Group Inc.", "NYSE", "Consumer Defensive", "Tobacco"),
    ("SBUX", "Starbucks Corporation", "NASDAQ", "Consumer Cyclical", "Restaurants"),
    ("C", "Citigroup Inc.", "NYSE", "Financial Services", "Banks"),
    ("MMM", "3M Company", "NYSE", "Industrials", "Conglomerate"),
    ("ADP", "Automatic Data Processing", "NASDAQ", "Technology", "IT Services"),
    ("DE", "Deere & Company", "NYSE", "Industrials", "Farm Machinery"),
    ("TJX", "TJX Companies Inc.", "NYSE", "Consumer Cyclical", "Retail"),
    ("SCHW", "Charles Schwab Corp.", "NYSE", "Financial Services", "Brokerage"),
    ("CVS", "CVS Health Corporation", "NYSE", "Healthcare", "Pharmacy"),
    ("MDLZ", "Mondelez International", "NASDAQ", "Consumer Defensive", "Food"),
    ("BMY", "Bristol-Myers Squibb", "NYSE", "Healthcare", "Drug Manufacturers"),
    ("SO", "Southern Company", "NYSE", "Utilities", "Utilities"),
    ("DUK", "Duke Energy Corporation", "NYSE", "Utilities", "Utilities"),
    ("CL", "Colgate-Palmolive Co.", "NYSE", "Consumer Defensive", "Household Products"),
    ("ZTS", "Zoetis Inc.", "NYSE", "Healthcare", "Veterinary"),
    ("PLD", "Prologis Inc.", "NYSE", "Real Estate", "REIT"),
    ("MU", "Micron Technology Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("REGN", "Regeneron Pharmaceuticals", "NASDAQ", "Healthcare", "Biotechnology"),
    ("SYK", "Stryker Corporation", "NYSE", "Healthcare", "Medical Devices"),
    ("VRTX", "Vertex Pharmaceuticals", "NASDAQ", "Healthcare", "Biotechnology"),
    ("CI", "Cigna Corporation", "NYSE", "Healthcare", "Healthcare Plans"),
    ("CB", "Chubb Limited", "NYSE", "Financial Services", "Insurance"),
    ("CME", "CME Group Inc.", "NASDAQ", "Financial Services", "Exchanges"),
    ("FDX", "FedEx Corporation", "NYSE", "Industrials", "Logistics"),
    ("PYPL", "PayPal Holdings Inc.", "NASDAQ", "Financial Services", "Fintech"),
    ("AMAT", "Applied Materials Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("LRCX", "Lam Research Corp.", "NASDAQ", "Technology", "Semiconductors"),
    ("ADI", "Analog Devices Inc.", "NASDAQ", "Technology", "Semiconductors"),
    ("PANW", "Palo Alto Networks", "NASDAQ", "Technology", "Cybersecurity"),
    ("SNPS", "Synopsys Inc.", "NASDAQ", "Technology", "Software"),
    ("KLAC", "KLA Corporation", "NASDAQ", "Technology", "Semiconductors"),
)


def large_cap_tickers() -> list[Ticker]:
    return [Ticker(*row) for row in SP500_LARGE_CAPS]
