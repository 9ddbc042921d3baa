from abc import ABC, abstractmethod
from typing import List, Dict

class ISalesLedger(ABC):
    @abstractmethod
    def record_order(self, order_id: int, items: List[Dict]) -> int:
        pass
