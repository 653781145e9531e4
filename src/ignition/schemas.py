from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List


class RawUserRecord(BaseModel):
    """
    A user row as returned by storage, decoded at the storage boundary.

    Extra columns are ignored; missing optional columns take their defaults.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str
    roles: str = Field(..., description="Comma-joined base roles")
    permissions: List[str] = Field(default_factory=list)
    total_purchases: int = Field(default=0, alias="totalPurchases")
    status: str = "active"


class User(BaseModel):
    """
    An application user built from a raw record.

    roles holds the base roles followed by the derived roles.
    """
    id: int
    name: str
    roles: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
