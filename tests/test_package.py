import rawvec


def test_version_matches_project():
    assert rawvec.__version__ == "0.1.0"


def test_public_api():
    for name in rawvec.__all__:
        assert hasattr(rawvec, name)
