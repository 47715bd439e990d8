"""
Pytest configuration and shared fixtures.

Key fixtures:
- valid_deal: a complete /generate-prompt body
- labels: the built-in label table
- lender_blob: a fenced, three-block lender research text
- paste_rows: a tokenized spreadsheet paste covering every section
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from deal_prompt.labels import default_label_table  # noqa: E402


@pytest.fixture
def labels():
    """Built-in label table."""
    return default_label_table()


@pytest.fixture
def valid_deal() -> dict:
    """Complete deal body as posted by the intake form."""
    return {
        'location': 'Austin, TX',
        'dealSummary': 'Bridge loan for a 40-unit multifamily acquisition',
        'dealDescription': 'Value-add repositioning, 85% occupied, sponsor has 12 years experience.',
        'assetType': '0',
        'loanAmount': 1500000,
        'loanType': '1',
        'loanTerm': '1',
    }


@pytest.fixture
def lender_blob() -> str:
    """Lender research output as returned by the upstream prompt chain."""
    return """```csv
Company Name,Website,Reason for Fit
Acme Capital,acme.com,Active multifamily bridge lender, closes in 30 days
Beacon Bank,beaconbank.com,Local balance-sheet lender
---
Company Name,Website,Reason for Fit
No specific lenders found for this category
---
Script
Hi, this is Dana from Northline Capital.
We have a multifamily bridge deal in Austin.
---
Email Subject,Deal Summary
Austin multifamily bridge,$1.5M bridge loan, 40 units, value-add
```"""


@pytest.fixture
def paste_rows() -> list[list[str]]:
    """Spreadsheet paste covering all three lender tiers, script and email."""
    return [
        ['Lender research for Austin deal'],
        ['Institutions that have done similar deals'],
        ['Company Name', 'Website', 'Reason for Fit'],
        ['Acme Capital', 'acme.com', 'Closed three Austin multifamily bridges'],
        ['Incomplete Lender', '', 'No website listed'],
        ['Institutions that can do the deal'],
        ['Company Name', 'Website', 'Reason for Fit'],
        ['Beacon Bank', 'beaconbank.com', 'Bridge program up to $5M'],
        ['Institutions within a 20km radius'],
        ['Company Name', 'Website', 'Reason for Fit'],
        ['Hill Country CU', 'hccu.org', 'Local credit union'],
        ['Voicemail Script'],
        ['Script'],
        ['Hi, this is Dana calling about a bridge loan.'],
        ['Deal Summary for Email'],
        ['Email Subject', 'Deal Summary'],
        ['Austin multifamily bridge', '$1.5M bridge, 40 units'],
    ]
