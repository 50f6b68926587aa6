import datetime as dt
import json

import httpx

from weatherclient.client import WeatherClient
from weatherclient.config import WeatherSettings
from weatherclient.outcome import DecodeFailure, Failure, HttpStatusFailure, Success, TransportFailure

from payloads import forecast_payload, weather_payload


class DummyResp:
    def __init__(self, status_code, json_data=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(json_data)
    def json(self):
        return json.loads(self.text)


class DummyHttpClient:
    def __init__(self, resp=None, exc=None):
        self.resp = resp
        self.exc = exc
        self.calls = []
    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.exc is not None:
            raise self.exc
        return self.resp


def make_client(resp=None, exc=None, settings=None):
    http = DummyHttpClient(resp, exc)
    return WeatherClient(settings or WeatherSettings(), http_client=http), http


def test_fetch_current_success():
    c, http = make_client(DummyResp(200, weather_payload()))
    outcome = c.fetch_current('Berlin', 'key')
    assert isinstance(outcome, Success)
    rec = outcome.value
    assert rec.city == 'Berlin'
    assert rec.temperature == 18.5
    assert rec.humidity == 60
    assert rec.wind_speed == 3.6
    assert rec.wind_deg == 240
    assert rec.pressure == 1012
    assert rec.conditions[0].icon == '01d'
    assert rec.conditions[0].description == 'clear sky'
    assert rec.timestamp == dt.datetime.fromtimestamp(1700000000, tz=dt.timezone.utc)


def test_request_shape():
    c, http = make_client(DummyResp(200, weather_payload()))
    c.fetch_current('Berlin', 'key')
    url, params = http.calls[0]
    assert url == 'https://api.openweathermap.org/data/2.5/weather'
    assert params == {'q': 'Berlin', 'appid': 'key', 'units': 'metric'}


def test_units_follow_settings_and_override():
    c, http = make_client(DummyResp(200, forecast_payload()), settings=WeatherSettings(units='imperial'))
    c.fetch_forecast('Berlin', 'key')
    c.fetch_forecast('Berlin', 'key', units='standard')
    assert http.calls[0][0].endswith('/forecast')
    assert http.calls[0][1]['units'] == 'imperial'
    assert http.calls[1][1]['units'] == 'standard'


def test_empty_city_passed_through():
    c, http = make_client(DummyResp(400, {"cod": "400", "message": "Nothing to geocode"}))
    outcome = c.fetch_current('', 'key')
    assert http.calls[0][1]['q'] == ''
    assert isinstance(outcome, Failure)


def test_fetch_forecast_success_sorted():
    payload = forecast_payload(temps=(10.0, 11.0, 12.0))
    payload['list'].reverse()
    c, _ = make_client(DummyResp(200, payload))
    outcome = c.fetch_forecast('Berlin', 'key')
    assert isinstance(outcome, Success)
    entries = outcome.value.entries
    assert [e.temperature for e in entries] == [10.0, 11.0, 12.0]
    assert entries[0].timestamp < entries[1].timestamp < entries[2].timestamp
    assert entries[0].temp_min == 9.0
    assert outcome.value.city == 'Berlin'


def test_http_status_failure(caplog):
    c, _ = make_client(DummyResp(404, {"cod": "404", "message": "city not found"}))
    outcome = c.fetch_current('Nowhere123', 'key')
    assert isinstance(outcome, Failure)
    assert outcome.status_code == 404
    assert isinstance(outcome.error, HttpStatusFailure)
    assert '404' in outcome.reason
    assert any('404' in r.getMessage() for r in caplog.records)


def test_malformed_json_is_failure():
    c, _ = make_client(DummyResp(200, text='{"name": "Berl'))
    outcome = c.fetch_current('Berlin', 'key')
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, DecodeFailure)
    assert outcome.status_code is None


def test_unexpected_shape_is_failure():
    for body in ({"name": "Berlin"}, [1, 2], {"list": "nope"}, {"list": [{"dt": "soon", "main": {"temp": 1}}]}):
        c, _ = make_client(DummyResp(200, body))
        assert isinstance(c.fetch_current('Berlin', 'key'), Failure)
        assert isinstance(c.fetch_forecast('Berlin', 'key'), Failure)


def test_out_of_range_values_are_failure():
    huge_dt = weather_payload()
    huge_dt['dt'] = 1e20
    infinite_humidity = weather_payload()
    infinite_humidity['main']['humidity'] = float('inf')
    forecast_huge_dt = forecast_payload()
    forecast_huge_dt['list'][0]['dt'] = 1e20
    forecast_infinite = forecast_payload()
    forecast_infinite['list'][0]['main']['humidity'] = float('inf')
    for fn, body in (('fetch_current', huge_dt), ('fetch_current', infinite_humidity),
                     ('fetch_forecast', forecast_huge_dt), ('fetch_forecast', forecast_infinite)):
        c, _ = make_client(DummyResp(200, body))
        outcome = getattr(c, fn)('Berlin', 'key')
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, DecodeFailure)


def test_deeply_nested_json_is_failure():
    nested = '[' * 100000 + ']' * 100000
    for fn in ('fetch_current', 'fetch_forecast'):
        c, _ = make_client(DummyResp(200, text=nested))
        outcome = getattr(c, fn)('Berlin', 'key')
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, DecodeFailure)


def test_transport_failure():
    c, _ = make_client(exc=httpx.ConnectError('network unreachable'))
    outcome = c.fetch_forecast('Berlin', 'key')
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, TransportFailure)
    assert 'network unreachable' in outcome.reason


def test_with_httpx_mock_transport():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=weather_payload(city='Oslo', temp=-3))

    http = httpx.Client(transport=httpx.MockTransport(handler))
    with WeatherClient(WeatherSettings(base_url='https://example.test/data/2.5/'), http_client=http) as c:
        outcome = c.fetch_current('Oslo', 'key')
    assert outcome.value.temperature == -3.0
    assert seen[0].url.path == '/data/2.5/weather'
    assert seen[0].url.params['appid'] == 'key'
