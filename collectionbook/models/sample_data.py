"""Data sets used by the tutorial lessons."""

from dataclasses import dataclass

from collectionbook.models.section_model import SectionModel

SINGLE_SECTION_COUNTS = (100,)
STICKY_SECTION_COUNTS = (100,) * 10
DYNAMICS_SECTION_COUNTS = (50, 50)


@dataclass(frozen=True)
class Destination:
    name: str
    place: str


DESTINATIONS = (
    Destination('Johannesburg', 'South Africa'),
    Destination('Berlin', 'Germany'),
    Destination('Toronto', 'Canada'),
    Destination('Mumbai', 'India'),
    Destination('Munich', 'Germany'),
    Destination('Madrid', 'Spain'),
    Destination('Dublin', 'Ireland'),
    Destination('Chennai', 'India'),
    Destination('Los Angeles', 'USA'),
    Destination('Miami', 'USA'),
    Destination('Prague', 'Czech Republic'),
    Destination('Vienna', 'Austria'),
    Destination('Shanghai', 'China'),
    Destination('Rome', 'Italy'),
    Destination('Taipei', 'Taiwan'),
    Destination('Osaka', 'Japan'),
    Destination('Milan', 'Italy'),
    Destination('Amsterdam', 'Netherlands'),
    Destination('Barcelona', 'Spain'),
    Destination('Istanbul', 'Turkey'),
    Destination('Osorno', 'Chile'),
    Destination('Hong Kong', 'China'),
    Destination('Kuala Lumpur', 'Malaysia'),
    Destination('New York', 'USA'),
    Destination('Seoul', 'South Korea'),
    Destination('Tokyo', 'Japan'),
    Destination('Singapore', 'Malaysia'),
    Destination('Dubai', 'UAE'),
    Destination('Paris', 'France'),
    Destination('London', 'UK'),
    Destination('Bangkok', 'Thailand'),
)


def passport_model(width: float = 375.0, height: float = 667.0) -> SectionModel:
    return SectionModel((len(DESTINATIONS),), width=width, height=height)
