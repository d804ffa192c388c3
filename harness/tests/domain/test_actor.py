from __future__ import annotations

from buoy_harness.domain.actor import ActorState, RpcMethod, actor_handle


def test_only_disconnected_is_terminal() -> None:
    terminal = [state for state in ActorState if state.terminal]

    assert terminal == [ActorState.DISCONNECTED]


def test_rpc_method_names_match_server_surface() -> None:
    assert [method.value for method in RpcMethod] == [
        "join",
        "fetchRooms",
        "joinRoom",
        "setProfile",
        "sendChat",
    ]


def test_actor_handle() -> None:
    assert actor_handle(7) == "Actor 7"
