from enum import Enum


class Mode(str, Enum):
    SOLO = 'solo'
    DUO = 'duo'

    @property
    def unit_size(self) -> int:
        return 1 if self is Mode.SOLO else 2

    @property
    def min_players(self) -> int:
        # Four units seat both tables.
        return 4 * self.unit_size

    @property
    def label(self) -> str:
        return 'Solo' if self is Mode.SOLO else 'Duo'


class SideName(str, Enum):
    A = 'A'
    B = 'B'

    @property
    def other(self) -> 'SideName':
        return SideName.B if self is SideName.A else SideName.A
