import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Alpha Vantage Configuration
API_KEY = os.getenv('API_KEY') or os.getenv('ALPHAVANTAGE_API_KEY')
ALPHAVANTAGE_BASE_URL = 'https://www.alphavantage.co/query'

# Telegram Configuration (optional - alerts go to console only when unset)
TG_BOT_TOKEN = os.getenv('TG_BOT_TOKEN')
TG_CHAT_ID = os.getenv('TG_CHAT_ID')
TELEGRAM_API_URL = 'https://api.telegram.org'

# Market Configuration
MARKET_TIMEZONE = 'Asia/Kolkata'
ALERT_START_HOUR = 9
ALERT_START_MINUTE = 20  # NSE opens 9:15, give it 5 min to settle
MARKET_CLOSE_HOUR = 15
MARKET_CLOSE_MINUTE = 0
EARLY_CUTOFF_MINUTES_RAW = os.getenv('EARLY_CUTOFF_MINUTES', '15')  # Stop alerting N min before close
try:
    EARLY_CUTOFF_MINUTES = int(EARLY_CUTOFF_MINUTES_RAW)
except ValueError:
    EARLY_CUTOFF_MINUTES = None  # Rejected by main.validate_config

# Dip Detection
DIP_THRESHOLD_PCT = -0.5  # -0.5% vs previous close

# Rate Limiting Configuration
# Alpha Vantage free tier throttles bursts, keep one request every 1.3s
REQUEST_DELAY_SECONDS = 1.3

# Request timeouts (seconds)
QUOTE_TIMEOUT_SECONDS = 15
INTRADAY_TIMEOUT_SECONDS = 20
DAILY_TIMEOUT_SECONDS = 20
TELEGRAM_TIMEOUT_SECONDS = 10

# Intraday fallback series
INTRADAY_INTERVAL = '5min'

# Web handler
WEB_HOST = os.getenv('WEB_HOST', '0.0.0.0')
WEB_PORT = int(os.getenv('WEB_PORT', '5000'))

# File Paths
LOG_FILE = os.getenv('LOG_FILE', 'logs/dip_alert.log')

# ETF/Index watchlist for the Indian market
# Verify symbols against your Alpha Vantage account before adding more
WATCHLIST = [
    {'name': 'Nifty 50 (NIFTYBEES)', 'symbol': 'NIFTYBEES'},
    {'name': 'Nifty Next 50 (JUNIORBEES)', 'symbol': 'JUNIORBEES'},
    {'name': 'Nifty Midcap 150 (NETFMID150)', 'symbol': 'NETFMID150'},
    {'name': 'Nifty Smallcap 250 (MOTISMLCAP)', 'symbol': 'MOTISMLCAP'},
    {'name': 'Nifty Bank (BANKBEES)', 'symbol': 'BANKBEES'},
    {'name': 'Nifty IT (INFY)', 'symbol': 'INFY'},  # Proxy, IT ETF not listed on Alpha Vantage
    {'name': 'Nifty FMCG (NIFTYFMCG)', 'symbol': 'NIFTYFMCG'},
]
