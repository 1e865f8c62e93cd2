"""Tests for the registry and live status adapters."""

import asyncio
import threading

import pytest

from streamer_mcp.adapters.live import check_live_status, list_live_streamers
from streamer_mcp.adapters.streamers import (
    add_streamer,
    delete_streamer,
    list_streamers,
    update_streamer,
)
from streamer_mcp.protocol.errors import AuthError, InvalidParams, NetworkError, StorageError


class TestRegistryOperations:
    async def test_add_is_idempotent(self, services):
        assert await add_streamer("x") == 'Streamer "x" added.'
        assert await add_streamer("x") == 'Streamer "x" already exists.'
        assert services.registry.load() == ["x"]

    async def test_add_is_case_sensitive(self, services):
        await add_streamer("alice")
        assert await add_streamer("Alice") == 'Streamer "Alice" added.'
        assert services.registry.load() == ["alice", "Alice"]

    async def test_list_empty(self, services):
        assert await list_streamers() == "No streamers available."

    async def test_list_joins_in_order(self, services):
        for name in ("alice", "bob", "carol"):
            await add_streamer(name)
        assert await list_streamers() == "alice, bob, carol"

    async def test_update_preserves_position(self, services):
        services.registry.save(["alice", "bob"])

        result = await update_streamer("alice", "alicia")

        assert result == 'Streamer "alice" updated to "alicia".'
        listing = await list_streamers()
        assert listing == "alicia, bob"
        assert "alice," not in listing

    async def test_update_missing_is_noop(self, services):
        services.registry.save(["alice"])

        assert await update_streamer("ghost", "spirit") == 'Streamer "ghost" not found.'
        assert services.registry.load() == ["alice"]

    async def test_update_rejects_collision(self, services):
        services.registry.save(["alice", "bob"])

        assert await update_streamer("alice", "bob") == 'Streamer "bob" already exists.'
        assert services.registry.load() == ["alice", "bob"]

    async def test_update_to_same_name(self, services):
        services.registry.save(["alice"])

        assert await update_streamer("alice", "alice") == 'Streamer "alice" updated to "alice".'
        assert services.registry.load() == ["alice"]

    async def test_delete(self, services):
        services.registry.save(["alice", "bob"])

        assert await delete_streamer("alice") == 'Streamer "alice" deleted.'
        assert services.registry.load() == ["bob"]

    async def test_delete_missing_is_noop(self, services):
        services.registry.save(["alice"])

        assert await delete_streamer("ghost") == 'Streamer "ghost" not found.'
        assert services.registry.load() == ["alice"]

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    async def test_blank_or_non_string_name_is_rejected(self, services, bad):
        with pytest.raises(InvalidParams):
            await add_streamer(bad)
        assert services.registry.load() == []

    async def test_names_are_trimmed(self, services):
        await add_streamer("  alice ")
        assert services.registry.load() == ["alice"]

    async def test_concurrent_adds_are_all_kept(self, services):
        results = await asyncio.gather(*(add_streamer(f"s{i}") for i in range(20)))

        assert all(r.endswith("added.") for r in results)
        saved = services.registry.load()
        assert len(saved) == 20
        assert set(saved) == {f"s{i}" for i in range(20)}

    async def test_concurrent_mixed_mutations_do_not_lose_writes(self, services):
        services.registry.save(["a", "b", "c"])

        await asyncio.gather(
            add_streamer("d"),
            delete_streamer("a"),
            update_streamer("b", "bee"),
            add_streamer("e"),
        )

        assert sorted(services.registry.load()) == ["bee", "c", "d", "e"]

    async def test_save_runs_off_the_event_loop_thread(self, services, monkeypatch):
        loop_thread = threading.get_ident()
        save_threads = []
        original_save = services.registry.save

        def recording_save(streamers):
            save_threads.append(threading.get_ident())
            original_save(streamers)

        monkeypatch.setattr(services.registry, "save", recording_save)

        await add_streamer("alice")
        await update_streamer("alice", "alicia")
        await delete_streamer("alicia")

        assert len(save_threads) == 3
        assert loop_thread not in save_threads

    async def test_storage_failure_propagates_and_releases_lock(self, services, monkeypatch):
        def failing_save(streamers):
            raise StorageError(services.registry.file_path, "disk full")

        monkeypatch.setattr(services.registry, "save", failing_save)

        with pytest.raises(StorageError):
            await add_streamer("alice")
        assert not services.registry.lock.locked()
        assert services.registry.load() == []


class TestLiveOperations:
    async def test_list_live_empty_registry_makes_no_calls(self, services, fake_twitch):
        assert await list_live_streamers() == "No streamers in the list."
        assert fake_twitch.auth_calls == 0
        assert fake_twitch.stream_calls == []

    async def test_alice_live_bob_offline(self, services, fake_twitch):
        services.registry.save(["alice", "bob"])
        fake_twitch.go_live("alice", game_name="Chess", title="Rapid games", viewer_count=120)

        live_text = await list_live_streamers()
        assert "alice" in live_text
        assert "bob" not in live_text

        block = await check_live_status("alice")
        assert "Chess" in block
        assert "Rapid games" in block
        assert "120" in block
        assert "https://www.twitch.tv/alice" in block
        assert "640x360" in block

    async def test_nobody_live(self, services, fake_twitch):
        services.registry.save(["alice", "bob"])
        assert await list_live_streamers() == "No one is live right now."

    async def test_check_unregistered_channel_still_looks_up(self, services, fake_twitch):
        assert await check_live_status("ghost") == '"ghost" is offline.'
        assert fake_twitch.stream_calls == ["ghost"]

    async def test_credential_reused_across_operations(self, services, fake_twitch):
        services.registry.save(["alice"])

        await check_live_status("alice")
        await list_live_streamers()
        assert fake_twitch.auth_calls == 1

        services.credentials.invalidate()
        await check_live_status("alice")
        assert fake_twitch.auth_calls == 2

    async def test_check_live_network_failure_is_hard(self, services, fake_twitch):
        fake_twitch.unreachable.add("alice")
        with pytest.raises(NetworkError):
            await check_live_status("alice")

    async def test_list_live_reports_unreachable_channels(self, services, fake_twitch):
        services.registry.save(["alice", "bob"])
        fake_twitch.unreachable.add("alice")
        fake_twitch.go_live("bob")

        text = await list_live_streamers()

        assert text.splitlines()[0] == "📺 Streamers currently live: bob"
        assert "Could not check: alice" in text

    async def test_list_live_auth_failure_is_hard(self, services, fake_twitch):
        services.registry.save(["alice"])
        fake_twitch.auth_status = 403
        with pytest.raises(AuthError):
            await list_live_streamers()
