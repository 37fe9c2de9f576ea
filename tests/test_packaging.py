import re
from pathlib import Path

SETUP_PY = Path(__file__).resolve().parents[1] / 'setup.py'


def test_django_requirement_matches_classifiers():
    text = SETUP_PY.read_text(encoding='utf-8')

    minimum = re.search(r'"Django>=([\d.]+)"', text).group(1)
    versions = re.findall(r'"Framework :: Django :: ([\d.]+)"', text)

    assert versions
    assert min(versions, key=lambda v: tuple(int(p) for p in v.split('.'))) == minimum
