import enum
import uuid

from sqlalchemy import BigInteger, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.models.base import Base, TimestampMixin

BYTES_PER_MB = 1_048_576


class UploadStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Upload(Base, TimestampMixin):
    __tablename__ = "uploads"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_upload_status"),
        CheckConstraint("file_size >= 0", name="ck_upload_file_size_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    storage_path: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=UploadStatus.PENDING.value, nullable=False, index=True
    )
    tokens_earned: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    purchases = relationship("Purchase", back_populates="upload")

    @property
    def size_mb(self) -> float:
        return self.file_size / BYTES_PER_MB
