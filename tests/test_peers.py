import random

import pytest

from trackerkit.ws.peers import PeerStatus, extract_response_peers


def _identity_value(_key, value):
    return value


@pytest.mark.parametrize("num_peers_in_map", range(50))
def test_extract_response_peers(num_peers_in_map):
    rng = random.Random(num_peers_in_map)
    peer_map = {i: i for i in range(num_peers_in_map)}

    for max_num_peers_to_take in range(50):
        for sender_key in range(50):
            response_peers = extract_response_peers(
                rng, peer_map, max_num_peers_to_take, sender_key, _identity_value
            )

            if num_peers_in_map > max_num_peers_to_take + 1:
                assert len(response_peers) == max_num_peers_to_take
            else:
                assert len(response_peers) <= max_num_peers_to_take

            assert sender_key not in response_peers
            assert len(response_peers) == len(set(response_peers))


def test_small_map_returns_all_but_sender_in_order():
    peer_map = {"a": 1, "b": 2, "c": 3}
    result = extract_response_peers(random.Random(0), peer_map, 5, "b", _identity_value)
    assert result == [1, 3]


def test_small_map_truncates_when_sender_missing():
    peer_map = {0: "x", 1: "y", 2: "z"}
    result = extract_response_peers(random.Random(0), peer_map, 2, 99, _identity_value)
    assert result == ["x", "y"]


def test_conversion_function_receives_key_and_value():
    peer_map = {1: "one", 2: "two"}
    result = extract_response_peers(
        random.Random(0), peer_map, 10, 1, lambda k, v: (k, v.upper())
    )
    assert result == [(2, "TWO")]


def test_empty_map_gives_no_peers():
    assert extract_response_peers(random.Random(0), {}, 3, 0, _identity_value) == []


def test_zero_to_take_gives_no_peers_from_large_map():
    peer_map = {i: i for i in range(20)}
    assert extract_response_peers(random.Random(1), peer_map, 0, 5, _identity_value) == []


def test_large_map_results_are_members_of_map():
    peer_map = {i: i * 10 for i in range(40)}
    result = extract_response_peers(random.Random(7), peer_map, 6, 3, _identity_value)
    assert len(result) == 6
    assert set(result) <= set(peer_map.values())
    assert 30 not in result


def test_negative_max_is_rejected():
    with pytest.raises(ValueError):
        extract_response_peers(random.Random(0), {1: 1}, -1, 0, _identity_value)


@pytest.mark.parametrize(
    ("stopped", "bytes_left", "expected"),
    [
        (True, 0, PeerStatus.STOPPED),
        (True, None, PeerStatus.STOPPED),
        (True, 50, PeerStatus.STOPPED),
        (False, 0, PeerStatus.SEEDING),
        (False, 50, PeerStatus.LEECHING),
        (False, None, PeerStatus.LEECHING),
    ],
)
def test_peer_status_from_event_and_bytes_left(stopped, bytes_left, expected):
    assert PeerStatus.from_event_and_bytes_left(stopped, bytes_left) is expected