import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from wikireader.navigation.store import MemorySessionStore  # noqa: E402

ARTICLE_HTML = """
<!DOCTYPE html>
<html>
<head><title>Cat</title></head>
<body>
<section>
<h2 id="Taxonomy">Taxonomy</h2>
<span class="mw-editsection"><a href="/w/index.php?action=edit">edit</a></span>
<p>The <a href="./Domestic_cat">domestic cat</a> is a <a href="/wiki/Mammal">mammal</a>.
See <a href="#Diet">diet</a>, <a href="File:Cat.jpg">the file</a> or
<a href="https://example.com/cats">an external page</a>.</p>
<figure><a href="./File:Cat_poster.jpg"><img src="//upload.wikimedia.org/cat.jpg"></a></figure>
<div class="noprint">Print-suppressed navigation</div>
<h3>Diet &amp; Hunting</h3>
<table class="infobox"><tr><td>Kingdom</td><td>Animalia</td></tr></table>
<table><caption>Weights</caption><tr><td>Male</td><td>4.5 kg</td></tr></table>
<table id="breeds"><tr><td>Siamese</td></tr></table>
<img src="/static/logo.png">
</section>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def memory_store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests.

    CLI commands call logging.basicConfig; restore the root logger afterwards.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)
