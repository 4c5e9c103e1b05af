from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    id: str
    date: str               # ISO-8601 date or date-time
    description: str
    amount: float
    type: str               # 'income' | 'expense'
    category_id: str
    category_name: str = ""
    category_icon: Optional[str] = None
    category_color: Optional[str] = None

    @property
    def day(self) -> str:
        """Calendar date part of the stored timestamp."""
        return self.date[:10]


@dataclass
class TransactionFilter:
    """Listing options; any field left as None imposes no constraint."""
    search_term: Optional[str] = None
    category_id: Optional[str] = None     # or 'all'
    type: Optional[str] = None            # 'income' | 'expense' | 'all'
    start_date: Optional[str] = None      # inclusive, YYYY-MM-DD
    end_date: Optional[str] = None        # inclusive, YYYY-MM-DD
    sort_key: str = "date"
    sort_direction: str = "desc"
    limit: Optional[int] = None
