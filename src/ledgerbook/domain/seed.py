"""Default chart of accounts, sample postings and users.

Seeded balances already include the sample postings, so seeding never
re-applies them.
"""

from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import Account, Transaction, User

CHART_OF_ACCOUNTS = (
    # Assets (1000-1999)
    Account(1, "1000", "Cash", "asset", "Cash on hand and in bank", True, Decimal("35000")),
    Account(2, "1100", "Accounts Receivable", "asset", "Money owed by customers", True, Decimal("15000")),
    Account(3, "1200", "Inventory", "asset", "Goods available for sale", True, Decimal("0")),
    Account(4, "1300", "Equipment", "asset", "Office equipment and machinery", True, Decimal("75000")),
    # Liabilities (2000-2999)
    Account(5, "2000", "Accounts Payable", "liability", "Money owed to suppliers", True, Decimal("25000")),
    Account(6, "2100", "Notes Payable", "liability", "Bank loans and notes", True, Decimal("0")),
    Account(7, "2200", "Accrued Expenses", "liability", "Expenses incurred but not yet paid", True, Decimal("0")),
    # Equity (3000-3999)
    Account(8, "3000", "Owner's Equity", "equity", "Owner's investment in the business", True, Decimal("100000")),
    Account(9, "3100", "Retained Earnings", "equity", "Accumulated profits", True, Decimal("0")),
    # Revenue (4000-4999)
    Account(10, "4000", "Sales Revenue", "revenue", "Revenue from sales of goods/services", True, Decimal("50000")),
    Account(11, "4100", "Service Revenue", "revenue", "Revenue from services provided", True, Decimal("25000")),
    Account(12, "4200", "Interest Income", "revenue", "Interest earned on investments", True, Decimal("0")),
    # Expenses (5000-5999)
    Account(13, "5000", "Cost of Goods Sold", "expense", "Direct costs of producing goods", True, Decimal("0")),
    Account(14, "5100", "Rent Expense", "expense", "Office and equipment rent", True, Decimal("12000")),
    Account(15, "5200", "Utilities Expense", "expense", "Electricity, water, internet, etc.", True, Decimal("3000")),
    Account(16, "5300", "Salaries Expense", "expense", "Employee salaries and wages", True, Decimal("30000")),
    Account(17, "5400", "Office Supplies", "expense", "Office supplies and materials", True, Decimal("2000")),
    Account(18, "5500", "Insurance Expense", "expense", "Business insurance premiums", True, Decimal("0")),
)

SAMPLE_TRANSACTIONS = (
    Transaction(1, "000001", date(2024, 1, 15), "Sale of services to ABC Company", 1, 10, Decimal("5000"), 1),
    Transaction(2, "000002", date(2024, 1, 14), "Monthly rent payment", 14, 1, Decimal("2000"), 1),
    Transaction(3, "000003", date(2024, 1, 13), "Purchase of office supplies", 17, 1, Decimal("500"), 1),
    Transaction(4, "000004", date(2024, 1, 12), "Payment received from XYZ Corp", 1, 2, Decimal("3500"), 1),
    Transaction(5, "000005", date(2024, 1, 11), "Employee salary payment", 16, 1, Decimal("4000"), 1),
)

SEED_USERS = (
    User(1, "admin@aibos.com", "Admin", "User", "admin", True),
)
