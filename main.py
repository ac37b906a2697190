#!/usr/bin/env python3
"""
NSE Dip Alert - Main Entry Point
Checks the ETF/index watchlist for dips vs previous close and sends alerts

Usage:
    python3 main.py               # One scan, print result as JSON
    python3 main.py --no-notify   # One scan without sending alerts
    python3 main.py --serve       # Start the web handler (/get, fresh scan on any other route)
"""

import argparse
import json
import sys
import logging
import os
from market_utils import get_market_status
from dip_scanner import DipScanner
import config


def setup_logging():
    """Configure logging to both file and console"""
    # Create logs directory if it doesn't exist
    log_dir = os.path.dirname(config.LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # Configure logging format
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    # File handler
    file_handler = logging.FileHandler(config.LOG_FILE)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format, date_format))

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))

    # Root logger configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def validate_config() -> bool:
    """Check required settings, logging what is missing"""
    logger = logging.getLogger(__name__)

    if not config.API_KEY:
        logger.error("Missing API_KEY (Alpha Vantage). Please configure .env file.")
        return False

    cutoff = config.EARLY_CUTOFF_MINUTES
    if not isinstance(cutoff, int) or cutoff < 0:
        value = config.EARLY_CUTOFF_MINUTES_RAW if cutoff is None else cutoff
        logger.error(f"Invalid EARLY_CUTOFF_MINUTES={value!r}, "
                     f"must be a non-negative integer. Please fix .env file.")
        return False

    if not (config.TG_BOT_TOKEN and config.TG_CHAT_ID):
        logger.info("TG_BOT_TOKEN / TG_CHAT_ID not set - alerts go to console only")

    return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="NSE watchlist dip alerts")
    parser.add_argument('--serve', action='store_true', help='Run the web handler instead of a single scan')
    parser.add_argument('--host', default=config.WEB_HOST, help='Web handler host')
    parser.add_argument('--port', type=int, default=config.WEB_PORT, help='Web handler port')
    parser.add_argument('--no-notify', action='store_true', help='Detect dips without sending alerts')
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function"""
    args = parse_args(argv)
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("NSE Dip Alert Starting...")
    logger.info("=" * 60)

    if not validate_config():
        return 1

    market_status = get_market_status()
    logger.info(f"Current time: {market_status['current_time']}")
    logger.info(f"Is trading day: {market_status['is_trading_day']}")
    logger.info(f"Alert window: {market_status['window_start']} - {market_status['window_cutoff']} IST")
    logger.info(f"Window open: {market_status['is_open']}")

    if args.serve:
        from web_app import create_app
        logger.info(f"Serving dip alerts on {args.host}:{args.port}")
        create_app().run(host=args.host, port=args.port)
        return 0

    try:
        scanner = DipScanner()
        result = scanner.scan(suppress_notify=args.no_notify)

        logger.info("=" * 60)
        logger.info("Scan Complete" if result['ok'] else f"Scan skipped: {result.get('message')}")
        logger.info(f"Dips found: {len(result['dips'])}")
        logger.info("=" * 60)

        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        return 0

    except Exception as e:
        logger.error(f"Fatal error during scan: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
