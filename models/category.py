from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    id: str
    name: str
    icon: Optional[str] = None    # symbolic icon name, e.g. 'Utensils'
    color: Optional[str] = None   # CSS color spec
