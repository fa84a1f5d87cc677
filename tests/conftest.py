"""Shared fixtures: canned registry HTML and an app wired to a fake upstream."""

import httpx
import pytest
from fastapi.testclient import TestClient

from registry_proxy.main import create_app

SEARCH_HTML = """
<html>
  <body>
    <nav><a href="/it-IT/Ricerca/ViaLibera">Ricerca</a></nav>
    <ul class="risultati">
      <li><a href="/it-IT/Oggetti/Info/123">  Parco eolico  Nord </a></li>
      <li><a>senza link</a></li>
      <li><a href="https://va.mite.gov.it/it-IT/Oggetti/Info/456"><span>Impianto</span> <b>FV</b></a></li>
      <li><a href="/it-IT/Oggetti/Info/789"></a></li>
      <li><a href="/it-IT/Oggetti/Documentazione/789">Documenti</a></li>
      <li><a href="/it-IT/Oggetti/Info/123">Parco eolico Nord</a></li>
    </ul>
    <a href="/it-IT/Ricerca/ViaLibera?Testo=eolico&amp;pagina=2">2</a>
  </body>
</html>
"""


class FakeUpstream:
    """Records every outbound request and answers through a swappable handler."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, text=SEARCH_HTML)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def search_html():
    return SEARCH_HTML


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def api(upstream):
    app = create_app(transport=httpx.MockTransport(upstream))
    with TestClient(app) as client:
        yield client
