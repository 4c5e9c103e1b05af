APP_NAME = "budgetbook"
DB_FILE = "budgetbook.db"
SEED_MARKER_KEY = "db_initial_data_seeded_v1"
CURRENCY_SETTING_KEY = "selectedCurrency"
DEFAULT_CURRENCY = "EUR"
DATE_FORMAT = "%Y-%m-%d"

TRANSACTION_TYPES = ("income", "expense")
BUDGET_PERIODS = ("weekly", "monthly", "yearly")
SORT_KEYS = ("date", "description", "amount", "type")

RECENT_TRANSACTIONS_LIMIT = 5
DASHBOARD_BUDGET_LIMIT = 3

DEFAULT_CATEGORIES = [
    {"id": "cat-1",  "name": "Housing",        "icon": "Home",             "color": "hsl(12, 76%, 61%)"},
    {"id": "cat-2",  "name": "Food",           "icon": "Utensils",         "color": "hsl(173, 58%, 39%)"},
    {"id": "cat-3",  "name": "Transportation", "icon": "Car",              "color": "hsl(197, 37%, 24%)"},
    {"id": "cat-4",  "name": "Entertainment",  "icon": "Gamepad2",         "color": "hsl(43, 74%, 66%)"},
    {"id": "cat-5",  "name": "Utilities",      "icon": "Lightbulb",        "color": "hsl(190, 60%, 60%)"},
    {"id": "cat-6",  "name": "Healthcare",     "icon": "Stethoscope",      "color": "hsl(27, 87%, 67%)"},
    {"id": "cat-7",  "name": "Shopping",       "icon": "ShoppingBag",      "color": "hsl(262, 52%, 60%)"},
    {"id": "cat-8",  "name": "Subscriptions",  "icon": "Wifi",             "color": "hsl(200, 70%, 60%)"},
    {"id": "cat-9",  "name": "Personal Care",  "icon": "Shirt",            "color": "hsl(300, 70%, 60%)"},
    {"id": "cat-10", "name": "Other Income",   "icon": "CircleDollarSign", "color": "hsl(120, 40%, 65%)"},
    {"id": "cat-11", "name": "Other Expense",  "icon": "Tag",              "color": "hsl(0, 0%, 75%)"},
]

DEFAULT_TRANSACTIONS = [
    {"id": "txn-1",  "date": "2024-07-15", "description": "Grocery shopping at Trader Joe's", "amount": 75.50,   "type": "expense", "category_id": "cat-2"},
    {"id": "txn-2",  "date": "2024-07-14", "description": "Netflix Subscription",             "amount": 15.99,   "type": "expense", "category_id": "cat-8"},
    {"id": "txn-3",  "date": "2024-07-14", "description": "Dinner with friends",              "amount": 45.00,   "type": "expense", "category_id": "cat-2"},
    {"id": "txn-4",  "date": "2024-07-13", "description": "Gas fill-up",                      "amount": 55.20,   "type": "expense", "category_id": "cat-3"},
    {"id": "txn-5",  "date": "2024-07-12", "description": "Freelance project payment",        "amount": 1200.00, "type": "income",  "category_id": "cat-10"},
    {"id": "txn-6",  "date": "2024-07-10", "description": "Electricity Bill",                 "amount": 85.00,   "type": "expense", "category_id": "cat-5"},
    {"id": "txn-7",  "date": "2024-07-05", "description": "Rent Payment",                     "amount": 1500.00, "type": "expense", "category_id": "cat-1"},
    {"id": "txn-8",  "date": "2024-07-20", "description": "Movie tickets",                    "amount": 30.00,   "type": "expense", "category_id": "cat-4"},
    {"id": "txn-9",  "date": "2024-07-22", "description": "New T-shirt",                      "amount": 25.00,   "type": "expense", "category_id": "cat-7"},
    {"id": "txn-10", "date": "2024-07-01", "description": "Salary Deposit",                   "amount": 3500.00, "type": "income",  "category_id": "cat-10"},
]

DEFAULT_BUDGETS = [
    {"id": "bud-1", "category_id": "cat-1", "limit_amount": 1500.0, "period": "monthly"},
    {"id": "bud-2", "category_id": "cat-2", "limit_amount": 400.0,  "period": "monthly"},
    {"id": "bud-3", "category_id": "cat-3", "limit_amount": 150.0,  "period": "monthly"},
    {"id": "bud-4", "category_id": "cat-4", "limit_amount": 100.0,  "period": "monthly"},
    {"id": "bud-8", "category_id": "cat-8", "limit_amount": 50.0,   "period": "monthly"},
]

# Fallback chart colors for CSS values matplotlib cannot resolve
CHART_PALETTE = [
    "#E76E50",
    "#2A9D90",
    "#274754",
    "#E8C468",
    "#F4A462",
    "#7E57C2",
    "#26A69A",
    "#888888",
]

OVER_LIMIT_COLOR = "#F44336"
LIMIT_BAR_COLOR = "#2A9D90"
