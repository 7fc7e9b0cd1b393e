import pytest

from dn42roa.tests.samples import SAMPLE_FILTER, SAMPLE_FILTER6


@pytest.fixture()
def make_registry(tmp_path):
    """Returns a function which writes object files into a DN42 style
    registry below tmp_path and returns the registry root."""
    root = tmp_path / "registry"
    (root / "data" / "route").mkdir(parents=True)
    (root / "data" / "route6").mkdir(parents=True)

    def _make_registry(objects=None, filters=False):
        for (object_class, name), text in (objects or {}).items():
            path = root / "data" / object_class / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(text, bytes):
                path.write_bytes(text)
            else:
                path.write_text(text)
        if filters:
            (root / "data" / "filter.txt").write_text(SAMPLE_FILTER)
            (root / "data" / "filter6.txt").write_text(SAMPLE_FILTER6)
        return root

    return _make_registry
