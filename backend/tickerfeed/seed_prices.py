"""Base prices and the symbol catalog for the price simulator."""

# Previous-close anchors for well-known symbols. Anything else gets a random base.
BASE_PRICES: dict[str, float] = {
    "AAPL": 150.0,
    "MSFT": 300.0,
    "GOOGL": 2500.0,
    "GOOG": 2500.0,
    "AMZN": 3000.0,
    "TSLA": 800.0,
    "NVDA": 400.0,
    "META": 250.0,
    "NFLX": 400.0,
    "BTC-USD": 35000.0,
    "ETH-USD": 2000.0,
    "JPM": 140.0,
    "JNJ": 160.0,
    "V": 220.0,
    "PG": 140.0,
}

# Range for symbols missing from BASE_PRICES
RANDOM_BASE_RANGE: tuple[float, float] = (50.0, 250.0)

# Initial price is perturbed by at most +/- half this fraction of the base
INITIAL_PERTURBATION = 0.05

# Day high/low are seeded up to this fraction away from the initial price
INITIAL_RANGE_SPREAD = 0.03

# Day volume baseline and per-tick increment
VOLUME_BASELINE: tuple[int, int] = (1_000_000, 51_000_000)
VOLUME_STEP_MAX = 10_000

# Prices never fall below this
PRICE_FLOOR = 0.01

# Symbols offered by the lookup endpoints: (symbol, name, sector)
SYMBOL_CATALOG: list[tuple[str, str, str]] = [
    ("AAPL", "Apple Inc.", "Technology"),
    ("MSFT", "Microsoft Corporation", "Technology"),
    ("GOOGL", "Alphabet Inc.", "Technology"),
    ("AMZN", "Amazon.com Inc.", "Consumer Discretionary"),
    ("TSLA", "Tesla Inc.", "Automotive"),
    ("NVDA", "NVIDIA Corporation", "Technology"),
    ("META", "Meta Platforms Inc.", "Technology"),
    ("NFLX", "Netflix Inc.", "Entertainment"),
    ("BTC-USD", "Bitcoin USD", "Cryptocurrency"),
    ("ETH-USD", "Ethereum USD", "Cryptocurrency"),
    ("GOOG", "Alphabet Inc. Class C", "Technology"),
    ("JPM", "JPMorgan Chase & Co.", "Financial"),
    ("JNJ", "Johnson & Johnson", "Healthcare"),
    ("V", "Visa Inc.", "Financial"),
    ("PG", "Procter & Gamble Co.", "Consumer Goods"),
    ("BABA", "Alibaba Group", "Consumer Discretionary"),
    ("DIS", "The Walt Disney Company", "Entertainment"),
    ("PYPL", "PayPal Holdings Inc.", "Financial"),
    ("INTC", "Intel Corporation", "Technology"),
    ("AMD", "Advanced Micro Devices", "Technology"),
]

# The first fifteen catalog entries make up the "popular" list
POPULAR_COUNT = 15
