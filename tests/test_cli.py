"""Tests for the command line entry point."""

from patchdump.__main__ import build_parser, main


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestMain:
    """Tests for main()."""

    def test_diff_two_trees(self, tmp_path, capsys):
        pre = tmp_path / "pre"
        post = tmp_path / "post"
        out = tmp_path / "out"
        write(pre / "game" / "blocktypes" / "stone.json", '{"hardness": 2}')
        write(pre / "game" / "old.json", "{}")
        write(post / "game" / "blocktypes" / "stone.json", '{"hardness": 3}')
        write(post / "mymod" / "extra.json", "[]")

        code = main([str(pre), str(post), "-o", str(out)])

        assert code == 0
        assert "1 modified, 1 new, 1 deleted, 0 unchanged" in capsys.readouterr().out
        assert (out / "diffs" / "game" / "blocktypes" / "stone.json.diff").exists()
        assert (out / "diffs" / "new" / "mymod" / "extra.json.diff").exists()
        assert (out / "diffs" / "deleted" / "game" / "old.json.diff").exists()

    def test_negative_context(self, tmp_path, capsys):
        code = main([str(tmp_path), str(tmp_path), "-o", str(tmp_path / "out"), "--context", "-1"])
        assert code == 2
        assert "context_lines" in capsys.readouterr().err

    def test_uncreatable_output(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        assert main([str(tmp_path), str(tmp_path), "-o", str(blocker / "out")]) == 1


def test_parser_defaults():
    args = build_parser().parse_args(["a", "b"])
    assert args.output_root is None
    assert args.context_lines is None
    assert args.verbose is False
