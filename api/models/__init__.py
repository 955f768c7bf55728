from api.models.admin import Admin
from api.models.base import Base
from api.models.purchase import Purchase
from api.models.upload import Upload, UploadStatus
from api.models.wallet import Wallet

__all__ = [
    "Base",
    "Admin",
    "Upload",
    "UploadStatus",
    "Wallet",
    "Purchase",
]
