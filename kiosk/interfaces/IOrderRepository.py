from abc import ABC, abstractmethod
from typing import List, Dict, Any

class IOrderRepository(ABC):
    @abstractmethod
    def create_order(self, payload: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    def list_orders(self) -> List[Any]:
        pass

    @abstractmethod
    def update_status(self, order_id: int, status: str) -> Any:
        pass

    @abstractmethod
    def delete_order(self, order_id: int) -> None:
        pass
