"""
Server-rendered calculator page: templates, static assets and form layout.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

UI_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = UI_DIR / "templates"
STATIC_DIR = UI_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# (section title, [(field, label, step)])
FORM_SECTIONS = [
    (
        "Property & Financing",
        [
            ("property_value", "Property Value", "1"),
            ("down_payment_percent", "Down Payment %", "1"),
            ("interest_rate", "Interest Rate %", "0.1"),
            ("loan_term_years", "Loan Term (Years)", "1"),
        ],
    ),
    (
        "Revenue Assumptions",
        [
            ("avg_nightly_rate", "Avg Nightly Rate", "1"),
            ("occupancy_rate", "Occupancy Rate %", "1"),
        ],
    ),
    (
        "Traditional Expenses (Annual)",
        [
            ("insurance", "Insurance", "1"),
            ("hoa_fees", "HOA/Condo Fees", "1"),
            ("utilities", "Utilities", "1"),
            ("maintenance_percent", "Maintenance % of Value", "0.1"),
            ("capex_percent", "CapEx % of Value", "0.1"),
            ("rehab_cost", "Rehab Cost", "1"),
        ],
    ),
    (
        "Short-Term Rental Expenses",
        [
            ("property_mgmt_percent", "Property Mgmt % of Revenue", "1"),
            ("cleaning_fee_per_night", "Cleaning Fee per Night", "1"),
            ("platform_fee_percent", "Platform Fee % of Revenue", "0.1"),
            ("transient_occupancy_tax_percent", "Transient Occupancy Tax %", "0.1"),
            ("str_licenses", "Licenses/Permits (Annual)", "1"),
            ("supplies_per_night", "Supplies per Night", "1"),
            ("internet_annual", "Internet (Annual)", "1"),
        ],
    ),
    (
        "Tax Assumptions",
        [
            ("marginal_tax_rate", "Marginal Tax Rate %", "1"),
            ("property_tax_rate", "Property Tax Rate %", "0.01"),
            ("land_value_percent", "Land % of Value", "1"),
            ("depreciation_years", "Depreciation Period (Years)", "0.5"),
        ],
    ),
]
