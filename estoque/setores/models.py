import uuid
from datetime import datetime

from sqlmodel import Field

from estoque.setores.schemas import SetorBase
from estoque.utils.dates import Timestamp, utcnow

class Setor(SetorBase, table=True):
    """Sector database model, the scoping unit for tables, products and users"""

    __tablename__ = "setores"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)
