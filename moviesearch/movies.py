# moviesearch/movies.py
"""
The movie catalogue that gets indexed, and the Record -> Document mapping.
"""

from typing import List

from langchain_core.documents import Document
from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str


MOVIES: List[Record] = [
    Record(
        id=1,
        title="Stepbrother",
        description="Comedic journey full of adult humor and awkwardness.",
    ),
    Record(
        id=2,
        title="The Matrix",
        description="Deals with alternate realities and questioning what's real.",
    ),
    Record(
        id=3,
        title="Shutter Island",
        description="A mind-bending plot with twists and turns.",
    ),
    Record(
        id=4,
        title="Memento",
        description="A non-linear narrative that challenges the viewer's perception.",
    ),
    Record(
        id=5,
        title="Doctor Strange",
        description="Features alternate dimensions and reality manipulation.",
    ),
    Record(
        id=6,
        title="Paw Patrol",
        description="Children's animated movie where a group of adorable puppies save people from all sorts of emergencies.",
    ),
    Record(
        id=7,
        title="Interstellar",
        description="Features futuristic space travel with high stakes",
    ),
    Record(
        id=8,
        title="Lupin",
        description="A modern twist on the tales of Arsène Lupin, a gentleman thief who operates in the heart of Paris.",
    ),
    Record(
        id=9,
        title="My dad's a bounty hunter",
        description="An action-packed animated series about a young girl whose father is an intergalactic bounty hunter.",
    ),
    Record(
        id=10,
        title="Abattoir",
        description=(
            "Story of a young teacher, Martins, who has seemed to be reliving his troubled past. "
            "Martins, who lost his mother to his brutal cultist of a Father, still had these bad "
            "memories hovering over him."
        ),
    ),
    Record(
        id=11,
        title="Hitman",
        description=(
            "Follows the story of Agent 47, a professional hitman working for an organization "
            "known as the International Contract Agency."
        ),
    ),
    Record(
        id=12,
        title="The Black Book",
        description=(
            "A Nigerian action thriller that tells a gripping story of corruption and police "
            "brutality. It focuses on a deacon named Paul Edima, whose son is wrongly accused of "
            "kidnapping. Paul sets off on a path to revenge as he looks to expose the corrupt "
            "officials responsible for framing his innocent son"
        ),
    ),
]


def to_document(record: Record) -> Document:
    """Build the text + metadata unit that gets embedded for a record."""
    return Document(
        page_content=f"Title: {record.title}\nDescription: {record.description}",
        metadata={"source": record.id, "title": record.title},
    )
