"""
Match Types and Outshot Policies

The closed set of game variants. Ids match the values stored in
`matches.match_type_id` and `leg.leg_type_id`.
"""

from enum import IntEnum


class MatchType(IntEnum):
    """Game variant identifiers."""

    X01 = 1
    SHOOTOUT = 2
    X01HANDICAP = 3
    CRICKET = 4
    DARTSATX = 5
    AROUNDTHEWORLD = 6
    SHANGHAI = 7
    AROUNDTHECLOCK = 8
    TICTACTOE = 9
    BERMUDATRIANGLE = 10
    FOURTWENTY = 11
    KILLBULL = 12
    GOTCHA = 13
    JDCPRACTICE = 14
    KNOCKOUT = 15
    SCAM = 16

    @property
    def display_name(self) -> str:
        return MATCH_TYPE_NAMES[self]

    @property
    def is_x01(self) -> bool:
        """X01 and X01 Handicap share bust and checkout rules."""
        return self in (MatchType.X01, MatchType.X01HANDICAP)


MATCH_TYPE_NAMES: dict[MatchType, str] = {
    MatchType.X01: "X01",
    MatchType.SHOOTOUT: "9 Dart Shootout",
    MatchType.X01HANDICAP: "X01 Handicap",
    MatchType.CRICKET: "Cricket",
    MatchType.DARTSATX: "Darts at X",
    MatchType.AROUNDTHEWORLD: "Around the World",
    MatchType.SHANGHAI: "Shanghai",
    MatchType.AROUNDTHECLOCK: "Around the Clock",
    MatchType.TICTACTOE: "Tic-Tac-Toe",
    MatchType.BERMUDATRIANGLE: "Bermuda Triangle",
    MatchType.FOURTWENTY: "420",
    MatchType.KILLBULL: "Kill Bull",
    MatchType.GOTCHA: "Gotcha",
    MatchType.JDCPRACTICE: "JDC Practice",
    MatchType.KNOCKOUT: "Knockout",
    MatchType.SCAM: "Scam",
}


class OutshotType(IntEnum):
    """Which darts may finish an X01 leg."""

    DOUBLE = 1
    MASTER = 2  # double or triple
    ANY = 3
