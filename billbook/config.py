"""Configuration constants for the GST Bill Book."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Directory holding the local bill storage slot.
DATA_DIR: Path = Path(os.environ.get("BILLBOOK_DATA_DIR", "data"))

# Name of the storage slot; the collection lives in DATA_DIR/<key>.json.
STORAGE_KEY: str = os.environ.get("BILLBOOK_STORAGE_KEY", "b_s_dyeing_bills")

# Sheet name used when exporting the bill register to Excel.
EXPORT_SHEET_NAME: str = "Bills"

# Business details printed on every bill.
BUSINESS_NAME: str = "B.S. DYEING"
BUSINESS_TAGLINE: str = "GARHI WALA & HANDBLOCK PRINTING"
BUSINESS_ADDRESS: str = "SANGANER, JAIPUR (RAJ.)"
BUSINESS_GSTIN: str = "08XXXXXXXXXXXZX"

BANK_NAME: str = "State Bank of India"
BANK_ACCOUNT_NO: str = "XXXXXXXXXXXX"
BANK_IFSC: str = "SBIN0XXXXX"
BANK_BRANCH: str = "Sanganer, Jaipur"

CURRENCY_SYMBOL: str = "₹"

LOG_LEVEL: str = os.environ.get("BILLBOOK_LOG_LEVEL", "INFO").upper()
