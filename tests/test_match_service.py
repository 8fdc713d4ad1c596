from __future__ import annotations

from db.models import Leg, Match, Owe, OweType
from services.match_service import MatchService


def wins(*winners: int) -> dict[int, int]:
    counts: dict[int, int] = {}
    for winner in winners:
        counts[winner] = counts.get(winner, 0) + 1
    return counts


def test_best_of_five_is_decided_by_three_wins() -> None:
    match = Match(match_type=1, wins_required=3)

    assert MatchService.is_match_finished(match, wins(1, 1)) == (False, None)
    assert MatchService.is_match_finished(match, wins(1, 1, 1)) == (True, 1)


def test_draw_when_legs_required_are_played() -> None:
    match = Match(match_type=1, wins_required=3, legs_required=4)

    assert MatchService.is_match_finished(match, wins(1, 2, 1)) == (False, None)
    assert MatchService.is_match_finished(match, wins(1, 2, 1, 2)) == (True, None)


def test_wins_per_player_counts_finished_legs(match_service, make_match, players) -> None:
    a, b = players[:2]
    match = make_match(wins_required=3)
    for winner in (a, b, a):
        Leg.create(match=match.id, starting_score=301, is_finished=True, winner=winner)
    Leg.create(match=match.id, starting_score=301)

    assert match_service.get_wins_per_player(match.id) == {a: 2, b: 1}


def test_update_after_leg_completes_match_with_owes(match_service, make_match, players) -> None:
    a, b, c = players
    match = make_match(wins_required=2, owe_item="Beer")
    for winner in (c, c):
        Leg.create(match=match.id, starting_score=301, is_finished=True, winner=winner)

    finished, winner_id = match_service.update_after_leg(match.id, players)

    assert (finished, winner_id) == (True, c)
    assert Match.get_by_id(match.id).winner_id == c
    owed = {(owe.ower_id, owe.owee_id): owe.amount for owe in Owe.select()}
    assert owed == {(a, c): 1, (b, c): 1}


def test_draw_charges_no_owes(match_service, make_match, players) -> None:
    a, b = players[:2]
    match = make_match(wins_required=2, legs_required=2, owe_item="Beer")
    for winner in (a, b):
        Leg.create(match=match.id, starting_score=301, is_finished=True, winner=winner)

    assert match_service.update_after_leg(match.id, [a, b]) == (True, None)
    assert Owe.select().count() == 0
    assert Match.get_by_id(match.id).is_finished


def test_register_payback_never_goes_negative(match_service, players) -> None:
    a, b = players[:2]
    beer = OweType.create(item="Beer")
    Owe.add_owe(a, b, beer.id, 2)

    assert match_service.register_payback(a, b, beer.id).amount == 1
    assert match_service.register_payback(a, b, beer.id, amount=5).amount == 0
    assert match_service.list_owes(a) == []


def test_list_owes_includes_both_sides(match_service, players) -> None:
    a, b, c = players
    beer = OweType.create(item="Beer")
    Owe.add_owe(a, b, beer.id)
    Owe.add_owe(c, a, beer.id)

    owes = match_service.list_owes(a)

    assert {(owe.ower_id, owe.owee_id) for owe in owes} == {(a, b), (c, a)}
    assert all(owe.owe_type.item == "Beer" for owe in owes)
