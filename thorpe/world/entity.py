"""Entities spawned into chunks and the supplement that collects them."""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass, field
from enum import Enum, auto

from thorpe.types import Vec3f
from thorpe.util.rng import RNG


class Alignment(Enum):
    """How an entity relates to players."""

    WILD = auto()
    PASSIVE = auto()
    NPC = auto()
    TAME = auto()


class BodyType(Enum):
    FEMALE = auto()
    MALE = auto()


class QuadrupedSmallSpecies(Enum):
    PIG = auto()
    SHEEP = auto()
    CAT = auto()


class BirdMediumSpecies(Enum):
    DUCK = auto()
    CHICKEN = auto()
    GOOSE = auto()
    PEACOCK = auto()


class HumanoidSpecies(Enum):
    HUMAN = auto()
    ELF = auto()
    DWARF = auto()
    ORC = auto()
    UNDEAD = auto()
    DANARI = auto()


@dataclass(frozen=True)
class ObjectBody:
    """An inanimate body such as a training dummy."""

    kind: str


TRAINING_DUMMY = ObjectBody("training_dummy")


@dataclass(frozen=True)
class QuadrupedSmallBody:
    species: QuadrupedSmallSpecies
    body_type: BodyType

    @classmethod
    def random_with(
        cls, rng: RNG, species: QuadrupedSmallSpecies
    ) -> QuadrupedSmallBody:
        return cls(species, rng.choice(list(BodyType)))


@dataclass(frozen=True)
class BirdMediumBody:
    species: BirdMediumSpecies
    body_type: BodyType

    @classmethod
    def random_with(cls, rng: RNG, species: BirdMediumSpecies) -> BirdMediumBody:
        return cls(species, rng.choice(list(BodyType)))


@dataclass(frozen=True)
class HumanoidBody:
    species: HumanoidSpecies
    body_type: BodyType
    hair_style: int
    skin: int
    eye_color: int

    @classmethod
    def random(cls, rng: RNG) -> HumanoidBody:
        return cls(
            species=rng.choice(list(HumanoidSpecies)),
            body_type=rng.choice(list(BodyType)),
            hair_style=rng.randrange(0, 20),
            skin=rng.randrange(0, 10),
            eye_color=rng.randrange(0, 8),
        )


Body: TypeAlias = ObjectBody | QuadrupedSmallBody | BirdMediumBody | HumanoidBody


@dataclass
class EntityInfo:
    """Description of an entity to spawn.

    Attributes:
        pos: World position to spawn at.
        body: The entity's body.
        alignment: Relationship to players.
        has_agency: Whether the entity runs an agent (dummies don't).
        main_tool: Asset name of the item held in the main hand, if any.
        name: Fixed display name. When None a name is generated on spawn.
    """

    pos: Vec3f
    body: Body
    alignment: Alignment = Alignment.WILD
    has_agency: bool = True
    main_tool: str | None = None
    name: str | None = None

    @property
    def is_humanoid(self) -> bool:
        return isinstance(self.body, HumanoidBody)


@dataclass
class ChunkSupplement:
    """Entities added to a chunk after its terrain is generated."""

    entities: list[EntityInfo] = field(default_factory=list)

    def add_entity(self, entity: EntityInfo) -> None:
        self.entities.append(entity)
