"""Short link data models."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict


class ShortLink(BaseModel):
    """A short id paired with the notation it resolves to."""
    id: str
    notation: str


class ShortLinkIndex(BaseModel):
    """Bidirectional short link index, persisted as a single JSON blob."""
    model_config = ConfigDict(populate_by_name=True)

    id_to_notation: Dict[str, str] = Field(default_factory=dict, alias="idToNotation")
    notation_to_id: Dict[str, str] = Field(default_factory=dict, alias="notationToId")

    def add(self, link: ShortLink) -> None:
        """Insert both directions of the mapping."""
        self.id_to_notation[link.id] = link.notation
        self.notation_to_id[link.notation] = link.id

    def remove(self, link: ShortLink) -> None:
        """Drop both directions of the mapping."""
        self.id_to_notation.pop(link.id, None)
        self.notation_to_id.pop(link.notation, None)

    def to_json(self) -> str:
        """Serialize with the persisted key names."""
        return self.model_dump_json(by_alias=True)
