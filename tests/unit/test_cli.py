"""Unit tests for the command-line interface."""

import logging

import pytest

from wiki2latex import compiler
from wiki2latex.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    StatusDisplay,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from wiki2latex.exceptions import (
    BundleError,
    CompilationError,
    DecorationBalanceError,
    DependencyError,
    FileError,
    ParsingError,
    ValidationError,
    Wiki2LatexError,
)
from wiki2latex.progress import StatusEvent


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the logging setup performed by ``main``."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.cli
class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args(["collection.zip"])
        assert args.bundle == "collection.zip"
        assert args.size == "letter"
        assert args.toc is None
        assert args.max_workers == 5
        assert not args.latex
        assert args.output is None

    def test_toc_flags(self):
        parser = create_parser()
        assert parser.parse_args(["c.zip", "--toc"]).toc is True
        assert parser.parse_args(["c.zip", "--no-toc"]).toc is False

    def test_toc_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["c.zip", "--toc", "--no-toc"])

    def test_invalid_size(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["c.zip", "--size", "legal"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "wiki2latex" in capsys.readouterr().out


@pytest.mark.cli
class TestExitCodes:
    """Test mapping exceptions to exit codes."""

    @pytest.mark.parametrize(
        "exception, code",
        [
            (DependencyError("compiler", ["xelatex"]), EXIT_DEPENDENCY_ERROR),
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (ValueError("bad"), EXIT_VALIDATION_ERROR),
            (FileError("gone"), EXIT_FILE_ERROR),
            (BundleError("no metabook"), EXIT_FILE_ERROR),
            (FileNotFoundError("gone"), EXIT_FILE_ERROR),
            (ParsingError("bad json"), EXIT_PARSING_ERROR),
            (DecorationBalanceError("unbalanced"), EXIT_RENDERING_ERROR),
            (CompilationError("xelatex failed"), EXIT_RENDERING_ERROR),
            (Wiki2LatexError("other"), EXIT_ERROR),
            (RuntimeError("other"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, code):
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.cli
class TestMain:
    """Test CLI entry points end to end."""

    def test_bundle_required(self, capsys):
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "bundle" in capsys.readouterr().err

    def test_missing_bundle(self, tmp_path):
        assert main([str(tmp_path / "nope.zip")]) == EXIT_FILE_ERROR

    def test_invalid_option_value(self, bundle_dir):
        assert main([str(bundle_dir), "--max-workers", "0"]) == EXIT_VALIDATION_ERROR

    def test_latex_output(self, bundle_dir, tmp_path):
        output = tmp_path / "out.tex"
        assert main([str(bundle_dir), "--latex", "-o", str(output), "-T", str(tmp_path)]) == EXIT_SUCCESS
        assert output.read_text(encoding="utf-8").startswith("\\input{")

    def test_verbose_progress(self, bundle_dir, tmp_path, capsys):
        output = tmp_path / "out.tex"
        assert main([str(bundle_dir), "-L", "-v", "-o", str(output), "-T", str(tmp_path)]) == EXIT_SUCCESS
        err = capsys.readouterr().err
        assert "[0%] Creating work space" in err
        assert "[100%] Done" in err

    def test_debug_maps_exception(self, bundle_dir, tmp_path, monkeypatch):
        monkeypatch.setattr(compiler.shutil, "which", lambda name: None)
        args = [str(bundle_dir), "-d", "-o", str(tmp_path / "out.pdf"), "-T", str(tmp_path)]
        assert main(args) == EXIT_DEPENDENCY_ERROR

    def test_html_translation(self, tmp_path):
        source = tmp_path / "article.html"
        source.write_text("<p>Hello, <i>world</i></p>", encoding="utf-8")
        output = tmp_path / "article.tex"
        assert main(["--html", str(source), "-o", str(output)]) == EXIT_SUCCESS
        assert output.read_text(encoding="utf-8") == "Hello, \\emph{world}\n\n"

    def test_html_translation_to_stdout(self, tmp_path, capsys):
        source = tmp_path / "article.html"
        source.write_text("<p>שלום</p>", encoding="utf-8")
        assert main(["--html", str(source), "--lang", "he"]) == EXIT_SUCCESS
        assert "שלום" in capsys.readouterr().out

    def test_html_missing_file(self, tmp_path):
        assert main(["--html", str(tmp_path / "nope.html")]) == EXIT_FILE_ERROR


@pytest.mark.cli
class TestStatusDisplay:
    """Test plain progress output."""

    def test_verbose(self, capsys):
        with StatusDisplay(use_rich=False, verbose=True) as display:
            display(StatusEvent("Processing article", "Greeting", 50))
        assert capsys.readouterr().err == "[50%] Processing article: Greeting\n"

    def test_quiet(self, capsys):
        with StatusDisplay(use_rich=False, verbose=False) as display:
            display(StatusEvent("Processing article"))
        assert capsys.readouterr().err == ""
