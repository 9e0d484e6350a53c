"""A tiny stand-in for the host engine's classes, shaped like the real hook targets."""
from __future__ import annotations


class BasicCharacterObject:
    def __init__(self, string_id: str | None, *, female: bool = False, hero: bool = False) -> None:
        self.string_id = string_id
        self._is_female = female
        self.is_hero = hero

    @property
    def is_female(self) -> bool:
        return self._is_female


class AgentOrigin:
    def __init__(self, seed: int) -> None:
        self.seed = seed


class AgentBuildData:
    def __init__(self, character, seed: int = 0) -> None:
        self.agent_character = character
        self.agent_origin = AgentOrigin(seed)


class Agent:
    def __init__(self, character, is_female: bool) -> None:
        self.character = character
        self.is_female = is_female


class Mission:
    """spawn_agent reads is_female on the spawning character and, optionally, a bystander."""

    def __init__(self, bystander=None, fail: bool = False) -> None:
        self.bystander = bystander
        self.fail = fail
        self.bystander_seen: list[bool] = []
        self.reads: list[bool] = []

    def spawn_agent(self, agent_build_data):
        character = agent_build_data.agent_character
        if character is None:
            return None
        self.reads = [character.is_female for _ in range(3)]
        if self.bystander is not None:
            self.bystander_seen.append(self.bystander.is_female)
        if self.fail:
            raise RuntimeError("spawn failed")
        return Agent(character, self.reads[0])


class TroopRosterElement:
    def __init__(self, character, number: int = 1) -> None:
        self.character = character
        self.number = number


class PartyCharacterVM:
    def __init__(self) -> None:
        self._character = None
        self._troop = None
        self.portrait_female: bool | None = None

    @property
    def character(self):
        return self._character

    @character.setter
    def character(self, value) -> None:
        self._character = value
        self.portrait_female = value.is_female if value is not None else None

    @property
    def troop(self):
        return self._troop

    @troop.setter
    def troop(self, value) -> None:
        self._troop = value
        self.portrait_female = value.character.is_female if value is not None else None


class EncyclopediaUnitVM:
    def __init__(self, character, is_compact: bool = False) -> None:
        self.character = character
        self.is_compact = is_compact
        self.portrait_female = character.is_female


class RecruitVolunteerTroopVM:
    def __init__(self, owner, character, index: int, on_recruit=None) -> None:
        self.owner = owner
        self.character = character
        self.index = index
        self.portrait_female = character.is_female if character is not None else None


class BrokenVM:
    """No constructor of its own and no hookable properties."""
