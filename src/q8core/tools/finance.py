"""Finance tool declarations: balances, spending, bills, affordability and wealth projection."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

FINANCE_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="get_balance_sheet",
        description=(
            "Get the user's current balance sheet including all accounts, assets, liabilities, "
            "and net worth. Use this for questions about account balances, total money, or "
            "financial overview."
        ),
        parameters=object_params(
            {
                "include_hidden": {
                    "type": "boolean",
                    "description": "Include hidden accounts in the calculation",
                },
                "group_by": {
                    "type": "string",
                    "enum": ["type", "institution", "none"],
                    "description": "How to group the accounts",
                },
            }
        ),
    ),
    ToolSchema(
        name="get_spending_summary",
        description=(
            "Get a summary of spending by category for a time period. Use for questions like "
            "'How much did I spend on X?' or 'What are my biggest expenses?'"
        ),
        parameters=object_params(
            {
                "period": {
                    "type": "string",
                    "enum": ["7d", "30d", "90d", "ytd", "all"],
                    "description": "Time period for the summary",
                },
                "category": {
                    "type": "string",
                    "description": (
                        "Specific category to focus on (e.g., 'Food & Dining', 'Shopping')"
                    ),
                },
                "limit": {"type": "number", "description": "Number of top categories to return"},
            }
        ),
    ),
    ToolSchema(
        name="get_recent_transactions",
        description=(
            "Get recent transactions with optional filtering. Use for questions about specific "
            "purchases or transaction history."
        ),
        parameters=object_params(
            {
                "limit": {"type": "number", "description": "Number of transactions to return"},
                "merchant": {"type": "string", "description": "Filter by merchant name"},
                "category": {"type": "string", "description": "Filter by category"},
                "min_amount": {"type": "number", "description": "Minimum transaction amount"},
                "max_amount": {"type": "number", "description": "Maximum transaction amount"},
                "type": {
                    "type": "string",
                    "enum": ["expense", "income", "all"],
                    "description": "Transaction type filter",
                },
            }
        ),
    ),
    ToolSchema(
        name="get_upcoming_bills",
        description=(
            "Get upcoming bills and recurring payments. Use for questions about what bills are "
            "due or upcoming expenses."
        ),
        parameters=object_params(
            {
                "days_ahead": {"type": "number", "description": "Number of days to look ahead"},
                "include_paid": {
                    "type": "boolean",
                    "description": "Include already paid bills for this period",
                },
            }
        ),
    ),
    ToolSchema(
        name="can_i_afford",
        description=(
            "Analyze whether the user can afford a purchase based on their current balance, "
            "upcoming bills, and spending patterns."
        ),
        parameters=object_params(
            {
                "amount": {"type": "number", "description": "The purchase amount to analyze"},
                "description": {"type": "string", "description": "What the purchase is for"},
                "use_credit": {
                    "type": "boolean",
                    "description": "Whether the purchase would be on credit",
                },
                "timeline": {
                    "type": "string",
                    "enum": ["now", "this_week", "this_month", "save_up"],
                    "description": "When the purchase would be made",
                },
            },
            required=["amount"],
        ),
    ),
    ToolSchema(
        name="simulate_wealth",
        description=(
            "Project future net worth based on current trajectory, contributions, and "
            "expected returns."
        ),
        parameters=object_params(
            {
                "years": {"type": "number", "description": "Number of years to project"},
                "monthly_contribution": {
                    "type": "number",
                    "description": "Monthly savings or investment contribution",
                },
                "expected_return": {
                    "type": "number",
                    "description": "Expected annual return as a decimal (e.g., 0.07 for 7%)",
                },
                "inflation_rate": {
                    "type": "number",
                    "description": "Expected annual inflation rate as a decimal",
                },
                "major_expenses": {
                    "type": "array",
                    "description": "Planned large expenses",
                    "items": {
                        "type": "object",
                        "properties": {
                            "description": {"type": "string"},
                            "amount": {"type": "number"},
                            "year": {"type": "number"},
                        },
                    },
                },
                "goal_amount": {"type": "number", "description": "Target net worth goal"},
            }
        ),
    ),
    ToolSchema(
        name="get_net_worth_history",
        description="Get historical net worth data to show trends over time.",
        parameters=object_params(
            {
                "period": {
                    "type": "string",
                    "enum": ["7d", "30d", "90d", "1y", "all"],
                    "description": "Time period for history",
                }
            }
        ),
    ),
    ToolSchema(
        name="find_subscriptions",
        description=(
            "Identify recurring subscriptions and memberships. Useful for finding ways to save "
            "money."
        ),
        parameters=object_params(
            {
                "include_cancelled": {
                    "type": "boolean",
                    "description": "Include recently cancelled subscriptions",
                }
            }
        ),
    ),
    ToolSchema(
        name="compare_spending",
        description="Compare spending between two time periods.",
        parameters=object_params(
            {
                "period1": {
                    "type": "string",
                    "enum": ["last_week", "last_month", "last_quarter"],
                    "description": "First period to compare",
                },
                "period2": {
                    "type": "string",
                    "enum": ["this_week", "this_month", "this_quarter"],
                    "description": "Second period to compare",
                },
                "category": {
                    "type": "string",
                    "description": "Optional category to focus the comparison on",
                },
            },
            required=["period1", "period2"],
        ),
    ),
    ToolSchema(
        name="get_financial_insights",
        description="Get AI-generated insights and recommendations about the user's finances.",
        parameters=object_params(
            {
                "focus": {
                    "type": "string",
                    "enum": ["spending", "savings", "debt", "investments", "all"],
                    "description": "Area to focus insights on",
                }
            }
        ),
    ),
]
