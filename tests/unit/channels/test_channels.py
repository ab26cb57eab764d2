"""Channel registry and matcher-channel behavior tests."""

from __future__ import annotations

import io
import tempfile
import threading
import unittest
from pathlib import Path

from lazypicker.channels import (
    ChannelOptions,
    ChannelsChannel,
    Entry,
    EnvChannel,
    FilesChannel,
    LinesChannel,
    MatcherChannel,
    StdinChannel,
    UnknownChannelError,
    channel_name_for_class,
    cli_channel_names,
    default_channel_name,
    to_channel,
    transition_targets,
)


class _GatedChannel(MatcherChannel):
    """Loader that yields one entry each time the gate is released."""

    name = "gated"

    def __init__(self, names: list[str]) -> None:
        self.names = names
        self.gate = threading.Semaphore(0)
        self.yielded = threading.Semaphore(0)
        super().__init__()
        self.start_loader()

    def load(self):
        for name in self.names:
            self.gate.acquire()
            yield Entry(name=name)
            self.yielded.release()

    def step(self) -> None:
        self.gate.release()
        self.yielded.acquire(timeout=5)


class RegistryTests(unittest.TestCase):
    def test_class_names_become_kebab_case(self) -> None:
        self.assertEqual(channel_name_for_class("FilesChannel"), "files")
        self.assertEqual(channel_name_for_class("GitRepoChannel"), "git-repo")
        self.assertEqual(channel_name_for_class("Env"), "env")

    def test_cli_names_exclude_internal_channels(self) -> None:
        names = cli_channel_names()
        self.assertEqual(names[:2], ("files", "env"))
        for internal in ("stdin", "lines", "channels"):
            self.assertNotIn(internal, names)
        self.assertEqual(default_channel_name(), "files")

    def test_registered_names_are_set_on_classes(self) -> None:
        self.assertEqual(FilesChannel.name, "files")
        self.assertEqual(StdinChannel.name, "stdin")
        self.assertEqual(ChannelsChannel.name, "channels")

    def test_to_channel_rejects_unknown_and_excluded_names(self) -> None:
        with self.assertRaises(UnknownChannelError) as ctx:
            to_channel("nope")
        self.assertIn("files", str(ctx.exception))
        with self.assertRaises(UnknownChannelError):
            to_channel("lines")

    def test_to_channel_builds_excluded_channel_when_allowed(self) -> None:
        channel = to_channel("channels", ChannelOptions(names=("files", "env")), allow_excluded=True)
        self.assertIsInstance(channel, ChannelsChannel)
        self.assertEqual([entry.name for entry in channel.all_results()], ["files", "env"])

    def test_transition_targets_accept_entries(self) -> None:
        self.assertEqual(set(transition_targets()), {"files", "lines"})


class MatcherChannelTests(unittest.TestCase):
    def test_find_ranks_matches_and_reports_counts(self) -> None:
        channel = LinesChannel.from_entries(Entry(name=name) for name in ["src/app.py", "README", "apple"])
        self.assertEqual(channel.result_count(), 3)
        channel.find("app")
        self.assertEqual(channel.total_count(), 3)
        self.assertEqual(channel.result_count(), 2)
        names = [entry.name for entry in channel.results(10, 0)]
        self.assertEqual(set(names), {"src/app.py", "apple"})
        self.assertIsNone(channel.get_result(2))

    def test_results_window_respects_offset(self) -> None:
        channel = LinesChannel.from_entries(Entry(name=f"item {idx}") for idx in range(10))
        self.assertEqual([entry.name for entry in channel.results(3, 4)], ["item 4", "item 5", "item 6"])
        self.assertEqual(channel.results(3, 9), [Entry(name="item 9")])
        self.assertEqual(channel.results(3, 20), [])

    def test_streamed_entries_appear_after_refresh(self) -> None:
        channel = _GatedChannel(["alpha", "beta", "gamma"])
        self.assertEqual(channel.result_count(), 0)
        channel.step()
        channel.step()
        self.assertTrue(channel.refresh())
        self.assertEqual(channel.result_count(), 2)
        self.assertFalse(channel.refresh())
        channel.step()
        channel.join_loader(timeout=5)
        channel.refresh()
        self.assertEqual(channel.result_count(), 3)
        self.assertFalse(channel.running())

    def test_query_applies_to_streamed_entries(self) -> None:
        channel = _GatedChannel(["alpha", "beta", "alphabet"])
        channel.find("alp")
        for _ in range(3):
            channel.step()
        channel.join_loader(timeout=5)
        channel.refresh()
        self.assertEqual({entry.name for entry in channel.all_results()}, {"alpha", "alphabet"})

    def test_shutdown_stops_loader(self) -> None:
        channel = _GatedChannel(["a", "b", "c"])
        channel.shutdown()
        for _ in range(3):
            channel.gate.release()
        channel.join_loader(timeout=5)
        channel.refresh()
        self.assertLessEqual(channel.total_count(), 1)


class ConcreteChannelTests(unittest.TestCase):
    def test_files_channel_walks_root_and_skips_hidden(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / ".dotfile").write_text("hidden", encoding="utf-8")
            (root / "src").mkdir()
            (root / "src" / "b.py").write_text("b", encoding="utf-8")
            (root / ".git").mkdir()
            (root / ".git" / "config").write_text("cfg", encoding="utf-8")

            channel = FilesChannel(root)
            channel.join_loader(timeout=5)
            channel.refresh()

            self.assertEqual([entry.name for entry in channel.all_results()], ["a.txt", "src/b.py"])
            self.assertEqual(channel.get_result(1).path, (root / "src" / "b.py").resolve())

    def test_files_channel_includes_hidden_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".dotfile").write_text("hidden", encoding="utf-8")
            channel = to_channel("files", ChannelOptions(root=root, show_hidden=True))
            channel.join_loader(timeout=5)
            channel.refresh()
            self.assertEqual([entry.name for entry in channel.all_results()], [".dotfile"])

    def test_files_channel_from_entries_keeps_existing_files_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "keep.txt").write_text("k", encoding="utf-8")
            entries = (Entry(name="keep.txt"), Entry(name="missing.txt"), Entry(name="HOME", value="/x"))
            channel = to_channel("files", ChannelOptions(root=root, entries=entries))
            self.assertFalse(channel.running())
            self.assertEqual([entry.name for entry in channel.all_results()], ["keep.txt"])

    def test_env_channel_lists_sorted_variables_with_values(self) -> None:
        channel = EnvChannel({"ZED": "1", "ALPHA": "2"})
        self.assertEqual(channel.all_results(), [Entry("ALPHA", "2"), Entry("ZED", "1")])

    def test_stdin_channel_streams_non_blank_lines(self) -> None:
        channel = to_channel(
            "stdin",
            ChannelOptions(stream=io.StringIO("one\n\n  \ntwo\r\nthree")),
            allow_excluded=True,
        )
        channel.join_loader(timeout=5)
        channel.refresh()
        self.assertEqual([entry.name for entry in channel.all_results()], ["one", "two", "three"])

    def test_stdin_channel_requires_stream(self) -> None:
        with self.assertRaises(ValueError):
            to_channel("stdin", ChannelOptions(), allow_excluded=True)

    def test_stdin_loader_failure_is_logged(self) -> None:
        class _Broken(io.StringIO):
            def __iter__(self):
                raise OSError("boom")

        with self.assertLogs("lazypicker.channels.base", level="ERROR"):
            channel = StdinChannel(_Broken())
            channel.join_loader(timeout=5)
        channel.refresh()
        self.assertEqual(channel.total_count(), 0)


if __name__ == "__main__":
    unittest.main()
