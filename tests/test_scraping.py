import pytest
import requests

from recipe_utils.scraping import PoliteSession, retry_on_transient_error, site_root


def _http_error(status_code):
    response = requests.Response()
    response.status_code = status_code
    return requests.exceptions.HTTPError(f"{status_code} error", response=response)


@pytest.fixture(autouse=True)
def no_sleep(mocker):
    return mocker.patch("time.sleep")


def test_retry_recovers_from_connection_error(mocker):
    func = mocker.Mock(side_effect=[requests.exceptions.ConnectionError("reset"), "ok"])
    wrapped = retry_on_transient_error(max_retries=3, initial_delay=0.5)(func)

    assert wrapped() == "ok"
    assert func.call_count == 2


@pytest.mark.parametrize("status_code", [429, 503])
def test_retry_on_retryable_status(mocker, status_code):
    func = mocker.Mock(side_effect=[_http_error(status_code), _http_error(status_code), "ok"])

    assert retry_on_transient_error()(func)() == "ok"
    assert func.call_count == 3


def test_retry_gives_up(mocker, no_sleep):
    func = mocker.Mock(side_effect=requests.exceptions.Timeout("slow"))

    with pytest.raises(requests.exceptions.Timeout):
        retry_on_transient_error(max_retries=3, initial_delay=1.0)(func)()

    assert func.call_count == 3
    assert [c.args[0] for c in no_sleep.call_args_list] == [1.0, 2.0]


def test_retry_does_not_retry_client_errors(mocker):
    func = mocker.Mock(side_effect=_http_error(404))

    with pytest.raises(requests.exceptions.HTTPError):
        retry_on_transient_error()(func)()

    assert func.call_count == 1


def test_site_root():
    assert site_root("https://example.com/recipes/1?x=2") == "https://example.com"
    with pytest.raises(ValueError):
        site_root("/recipes/1")


@pytest.fixture
def robots(mocker):
    parser = mocker.Mock()
    parser.crawl_delay.return_value = None
    parser.can_fetch.side_effect = lambda agent, url: "/private" not in url
    return parser


def test_polite_session_get(mocker, robots):
    http = mocker.Mock(headers={})
    http.get.return_value = mocker.Mock(status_code=200)
    session = PoliteSession("https://example.com", session=http, robots=robots)

    response = session.get("https://example.com/recipes/1")

    assert response is http.get.return_value
    http.get.assert_called_once_with("https://example.com/recipes/1", timeout=30)
    assert http.headers["User-Agent"] == "recipe-importer/1.0"
    assert session.crawl_delay == 1.0


def test_polite_session_respects_robots(mocker, robots):
    http = mocker.Mock(headers={})
    session = PoliteSession("https://example.com", session=http, robots=robots)

    with pytest.raises(PermissionError):
        session.get("https://example.com/private/recipe")
    http.get.assert_not_called()


def test_polite_session_crawl_delay_from_robots(mocker, robots):
    robots.crawl_delay.return_value = 5
    session = PoliteSession("https://example.com", session=mocker.Mock(headers={}), robots=robots)
    assert session.crawl_delay == 5.0


def test_polite_session_unreadable_robots_allows_all(mocker):
    mocker.patch(
        "urllib.robotparser.RobotFileParser.read", side_effect=OSError("unreachable")
    )

    session = PoliteSession.for_url(
        "https://example.com/recipes/1", session=mocker.Mock(headers={})
    )

    assert session.base_url == "https://example.com"
    assert session.is_allowed("https://example.com/anything")
    assert session.crawl_delay == 1.0
