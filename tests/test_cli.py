"""
Critical CLI tests — prompt protocol, find-only safety, and the end-of-run error summary.
"""
import sys
from unittest import mock
import pytest
from dupes import cli
from dupes import config as config_module
from dupes.cli import CLIApplication
from dupes.services.file_service import FileService


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """No ~/.dupes.toml and no DUPES_* variables leak into CLI tests."""
    monkeypatch.setattr(config_module, "default_config_path", lambda: tmp_path / "absent.toml")
    for name in ("IGNORE_DOTFILES", "FIND_ONLY", "MAX_SIZE", "ALGORITHM", "TRASH", "STOP_ON_ERROR"):
        monkeypatch.delenv(f"DUPES_{name}", raising=False)


def _answers(*replies):
    """input() replacement returning the given replies in order."""
    it = iter(replies)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(it)

    fake_input.prompts = prompts
    return fake_input


class TestFindOnly:

    def test_lists_groups_without_prompting_or_deleting(self, hello_world_dir, capsys):
        answers = _answers()
        with mock.patch.object(FileService, "remove") as mock_remove:
            CLIApplication(input_func=answers).run(["--dir", str(hello_world_dir), "--find-only"])

        out = capsys.readouterr().out
        assert f"Dupes found for {hello_world_dir / 'a.txt'}" in out
        assert f"\t [0] {hello_world_dir / 'a.txt'}" in out
        assert f"\t [1] {hello_world_dir / 'b.txt'}" in out
        assert "c.txt" not in out, "Single-file groups are never shown"
        assert answers.prompts == []
        mock_remove.assert_not_called()

    def test_find_only_does_not_need_a_terminal(self, hello_world_dir, capsys):
        with mock.patch.object(sys.stdin, "isatty", return_value=False):
            CLIApplication().run(["--dir", str(hello_world_dir), "--find-only"])
        assert "Dupes found for" in capsys.readouterr().out

    def test_no_duplicates_message(self, temp_dir, capsys):
        (temp_dir / "only.txt").write_bytes(b"x")
        CLIApplication().run(["-d", str(temp_dir), "--find-only"])
        assert "No duplicate files found." in capsys.readouterr().out


class TestInteractiveResolution:

    def test_keep_index_deletes_the_others(self, hello_world_dir, capsys):
        answers = _answers("1")
        CLIApplication(input_func=answers).run(["--dir", str(hello_world_dir)])

        assert not (hello_world_dir / "a.txt").exists()
        assert (hello_world_dir / "b.txt").exists()
        assert (hello_world_dir / "c.txt").exists()
        assert answers.prompts == ["Remove dupes? [Y/n or index of file to keep]: "]
        assert "The following errors occurred" not in capsys.readouterr().out

    def test_blank_answer_keeps_first(self, hello_world_dir):
        CLIApplication(input_func=_answers("")).run(["--dir", str(hello_world_dir)])

        assert (hello_world_dir / "a.txt").exists()
        assert not (hello_world_dir / "b.txt").exists()

    def test_decline_takes_no_action(self, hello_world_dir, capsys):
        CLIApplication(input_func=_answers("n")).run(["--dir", str(hello_world_dir)])

        assert "No action taken. Continuing." in capsys.readouterr().out
        assert (hello_world_dir / "a.txt").exists()
        assert (hello_world_dir / "b.txt").exists()

    def test_each_group_gets_its_own_decision(self, test_files):
        """Three-file group declined, two-file group resolved."""
        root = test_files["dup1_a"].parent
        CLIApplication(input_func=_answers("n", "1")).run(["--dir", str(root), "--ignore-dotfiles"])

        assert test_files["dup1_a"].exists()
        assert test_files["dup1_b"].exists()
        assert test_files["sub_dup"].exists()
        assert not test_files["dup2_a"].exists()
        assert test_files["dup2_b"].exists()

    def test_out_of_range_index_is_rejected_and_reported(self, hello_world_dir, capsys):
        CLIApplication(input_func=_answers("2")).run(["--dir", str(hello_world_dir)])

        out = capsys.readouterr().out
        assert "Invalid index [2]" in out
        assert "The following errors occurred during the run:" in out
        assert (hello_world_dir / "a.txt").exists()
        assert (hello_world_dir / "b.txt").exists()

    def test_deletion_errors_reach_the_summary(self, hello_world_dir, capsys):
        """A failed removal is never dropped silently."""
        with mock.patch.object(FileService, "remove", side_effect=RuntimeError("Failed to remove file: busy")):
            CLIApplication(input_func=_answers("0")).run(["--dir", str(hello_world_dir)])

        out = capsys.readouterr().out
        summary = out.split("The following errors occurred during the run:")[1]
        assert f"Failed to remove {hello_world_dir / 'b.txt'}" in summary
        assert "busy" in summary

    def test_trash_flag_uses_send2trash_path(self, hello_world_dir):
        with mock.patch.object(FileService, "move_to_trash") as mock_trash, \
                mock.patch.object(FileService, "remove") as mock_remove:
            CLIApplication(input_func=_answers("y")).run(["--dir", str(hello_world_dir), "--trash"])

        mock_trash.assert_called_once_with(str(hello_world_dir / "b.txt"))
        mock_remove.assert_not_called()

    def test_end_of_input_leaves_remaining_groups(self, test_files, capsys):
        def closed_input(prompt):
            raise EOFError

        root = test_files["dup1_a"].parent
        CLIApplication(input_func=closed_input).run(["--dir", str(root)])

        assert "No more input" in capsys.readouterr().out
        assert all(p.exists() for p in test_files.values())

    def test_prompting_requires_a_terminal(self, hello_world_dir, capsys):
        with mock.patch.object(sys.stdin, "isatty", return_value=False):
            with pytest.raises(SystemExit) as exc_info:
                CLIApplication().run(["--dir", str(hello_world_dir)])
        assert exc_info.value.code == 1
        assert "--find-only" in capsys.readouterr().err


class TestErrorsAndOptions:

    def test_missing_directory_exits_non_zero(self, temp_dir, capsys):
        missing = temp_dir / "missing"
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--dir", str(missing), "--find-only"])

        assert exc_info.value.code == 1
        assert f"No such directory [{missing}]" in capsys.readouterr().err

    def test_invalid_max_size_exits(self, hello_world_dir):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--dir", str(hello_world_dir), "--find-only", "-M", "lots"])
        assert exc_info.value.code == 1

    def test_infinite_max_size_is_a_format_error(self, hello_world_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--dir", str(hello_world_dir), "--find-only", "-M", "infB"])
        assert exc_info.value.code == 1
        assert "Invalid size format" in capsys.readouterr().err

    def test_max_size_filters_large_files(self, hello_world_dir, capsys):
        CLIApplication().run(["--dir", str(hello_world_dir), "--find-only", "-M", "5"])
        assert "Dupes found" not in capsys.readouterr().out

    def test_config_file_supplies_defaults(self, hello_world_dir, tmp_path, capsys):
        cfg = tmp_path / "cfg.toml"
        cfg.write_text("find_only = true\n")

        CLIApplication(input_func=_answers()).run(["--dir", str(hello_world_dir), "--config", str(cfg)])

        assert "Dupes found for" in capsys.readouterr().out
        assert (hello_world_dir / "a.txt").exists()

    def test_flag_overrides_config(self, hello_world_dir, tmp_path):
        cfg = tmp_path / "cfg.toml"
        cfg.write_text("find_only = true\n")

        CLIApplication(input_func=_answers("1")).run(
            ["--dir", str(hello_world_dir), "--config", str(cfg), "--no-find-only"])

        assert not (hello_world_dir / "a.txt").exists()

    def test_bad_config_exits(self, hello_world_dir, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--dir", str(hello_world_dir), "--config", str(tmp_path / "none.toml")])
        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_verbose_prints_summary(self, hello_world_dir, capsys):
        CLIApplication().run(["--dir", str(hello_world_dir), "--find-only", "-v"])

        captured = capsys.readouterr()
        assert "Files hashed: 3" in captured.out
        assert "Duplicate groups: 1 (2 files)" in captured.out
        assert "Reclaimable space: 5B" in captured.out
        assert "[Hashing] 3/3" in captured.err


class TestMain:

    def test_keyboard_interrupt_exits_130(self):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 130

    def test_unexpected_error_exits_1(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 1
