from dataclasses import dataclass
from typing import Optional


@dataclass
class Budget:
    id: str
    category_id: str
    limit_amount: float
    period: str             # 'weekly' | 'monthly' | 'yearly'
    category_name: str = ""
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    spent_amount: float = 0.0
    window_start: Optional[str] = None
    window_end: Optional[str] = None

    @property
    def percentage(self) -> float:
        if self.limit_amount <= 0:
            return 0.0
        return self.spent_amount / self.limit_amount

    @property
    def remaining(self) -> float:
        return max(0.0, self.limit_amount - self.spent_amount)

    @property
    def is_over_limit(self) -> bool:
        return self.spent_amount > self.limit_amount
