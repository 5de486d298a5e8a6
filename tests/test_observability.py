import io
import json
from pathlib import Path

from ffcross.observability import StructuredLogger


def test_records_carry_operation_dependency_and_strategy() -> None:
    logger = StructuredLogger(stream=None)
    logger.info("build_missing", "Building librist-dev", dependency="librist-dev", strategy="meson")
    logger.success("build_missing", "Installed librist-dev", dependency="librist-dev")
    logger.warning("cross_build", "Setting up binfmt")

    records = logger.records_for_dependency("librist-dev")
    assert [record["level"] for record in records] == ["info", "success"]
    assert records[0]["strategy"] == "meson"
    assert len(logger.records) == 3


def test_plain_stream_output_has_level_tags() -> None:
    stream = io.StringIO()
    logger = StructuredLogger(stream=stream)

    logger.error("build_missing", "libnope-dev is unsupported")

    assert stream.getvalue() == "[ERROR] libnope-dev is unsupported\n"


def test_color_output_wraps_level_tag() -> None:
    stream = io.StringIO()
    logger = StructuredLogger(stream=stream, color=True)

    logger.success("cross_build", "Clean complete")

    assert stream.getvalue() == "\033[0;32m[SUCCESS]\033[0m Clean complete\n"


def test_json_lines_export(tmp_path: Path) -> None:
    logger = StructuredLogger(stream=None)
    logger.info("build_missing", "one", extra={"attempt": 1})
    logger.info("build_missing", "two")

    path = logger.to_json_lines(tmp_path / "logs" / "deps.jsonl")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["one", "two"]
    assert json.loads(lines[0])["extra"] == {"attempt": 1}
