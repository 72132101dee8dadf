from taxharvest.db.models.posting import PostingRecord
from taxharvest.db.models.price import PriceRecord

__all__ = [
    "PostingRecord",
    "PriceRecord",
]
