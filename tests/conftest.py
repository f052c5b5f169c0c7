import pytest


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content: str, encoding: str = "utf-8") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
        return str(path)

    return _write
