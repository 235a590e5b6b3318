# tests/test_reader.py
import pytest

from zipfiles.core.reader import ContentReader, read_file
from zipfiles.errors import ReadError
from zipfiles.models import FileRecord

def make_record(path, rel):
    return FileRecord(absolute_path=path, relative_path=rel)

def test_read_trims_and_terminates(tmp_path):
    path = tmp_path / "main.py"
    path.write_text("\n\n   print('hi')\n\n\t\n", encoding="utf-8")

    assert read_file(make_record(path, "main.py"), annotate=False) == "print('hi')\n\n"

def test_read_with_annotation(tmp_path):
    path = tmp_path / "main.py"
    path.write_text("print('hi')\n", encoding="utf-8")

    block = read_file(make_record(path, "src/main.py"), annotate=True)
    assert block == "// src/main.py\nprint('hi')\n\n"

def test_annotation_round_trip(tmp_path):
    original = "  line one\nline two  \n"
    path = tmp_path / "doc.md"
    path.write_text(original, encoding="utf-8")
    record = make_record(path, "doc.md")

    block = read_file(record, annotate=True)
    marker, _, rest = block.partition("\n")
    assert marker == "// doc.md"
    assert rest[:-2] == original.strip()
    assert rest.endswith("\n\n")

    plain = read_file(record, annotate=False)
    assert not plain.startswith("//")
    assert plain[:-2] == original.strip()

def test_empty_file(tmp_path):
    path = tmp_path / "empty.py"
    path.write_text("   \n", encoding="utf-8")

    assert read_file(make_record(path, "empty.py"), annotate=True) == "// empty.py\n\n\n"

def test_bom_is_dropped(tmp_path):
    path = tmp_path / "bom.ts"
    path.write_bytes(b"\xef\xbb\xbfconst a = 1;\n")

    assert read_file(make_record(path, "bom.ts"), annotate=False) == "const a = 1;\n\n"

def test_binary_is_best_effort_text(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")

    block = ContentReader().read(make_record(path, "image.png"), annotate=False)
    assert "PNG" in block
    assert "�" in block

def test_missing_file_raises_read_error(tmp_path):
    path = tmp_path / "gone.py"

    with pytest.raises(ReadError) as excinfo:
        read_file(make_record(path, "gone.py"), annotate=False)

    assert excinfo.value.path == path
    assert "gone.py" in str(excinfo.value)

def test_directory_raises_read_error(tmp_path):
    with pytest.raises(ReadError):
        read_file(make_record(tmp_path, "."), annotate=False)
