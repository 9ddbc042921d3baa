from abc import ABC, abstractmethod
from typing import List, Optional, Any

class IProductRepository(ABC):
    @abstractmethod
    def list_products(self) -> List[Any]:
        pass

    @abstractmethod
    def create_product(self, name: str, price: float, image_url: Optional[str] = None,
                       category: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    def update_product(self, product_id: int, name: str, price: float, image_url: Optional[str],
                       category: Optional[str], in_stock: Optional[bool]) -> Any:
        pass

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        pass

    @abstractmethod
    def toggle_stock(self, product_id: int, in_stock: Optional[bool] = None) -> Any:
        pass
