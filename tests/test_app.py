import logging

import pytest

from bodyfat import IDLE_MESSAGE, SUCCESS_MESSAGE, InputError, Sex, calculate
from main import app, log_level

MALE = dict(sex="male", weight="80", height="180", waist="85", neck="38", hip="", age="30")
FEMALE = dict(sex="female", weight="65", height="165", waist="75", neck="32", hip="95", age="28")


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_get_shows_blank_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert IDLE_MESSAGE in html
    assert "0.0%" in html
    assert 'class="bad"' not in html
    assert 'value="male" checked' in html


def test_post_male_success(client):
    resp = client.post("/", data=MALE)
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    expected = calculate(sex=Sex.MALE, **{k: v for k, v in MALE.items() if k != "sex"})
    assert f"{expected.display}%" in html
    assert SUCCESS_MESSAGE in html
    assert 'class="bad"' not in html
    # entered values are kept
    assert 'value="85"' in html


def test_post_flags_bad_field(client):
    resp = client.post("/", data=dict(MALE, neck="abc"))
    html = resp.get_data(as_text=True)
    assert InputError.INVALID_NECK.message in html
    assert html.count('class="bad"') == 1
    neck_input = html[html.index('id="neck"'):]
    assert neck_input.index('class="bad"') < neck_input.index(">")
    assert "status failure" in html


def test_post_female_missing_hip(client):
    html = client.post("/", data=dict(FEMALE, hip=" ")).get_data(as_text=True)
    assert InputError.INVALID_HIP.message in html
    assert 'value="female" checked' in html


def test_post_circumference_issue_has_no_field(client):
    html = client.post("/", data=dict(MALE, waist="80", neck="79.99")).get_data(as_text=True)
    assert "Check waist/neck input." in html
    assert 'class="bad"' not in html
    assert "0.0%" in html


def test_unknown_sex_falls_back_to_male(client):
    html = client.post("/", data=dict(MALE, sex="other", hip="junk")).get_data(as_text=True)
    assert SUCCESS_MESSAGE in html


def test_reset_is_a_plain_get(client):
    client.post("/", data=MALE)
    html = client.get("/").get_data(as_text=True)
    assert IDLE_MESSAGE in html
    assert 'value="85"' not in html


def test_api_success(client):
    resp = client.post("/api/estimate", json=FEMALE)
    assert resp.status_code == 200
    body = resp.get_json()
    expected = calculate(sex=Sex.FEMALE, **{k: v for k, v in FEMALE.items() if k != "sex"})
    assert body["ok"] is True
    assert body["sex"] == "female"
    assert body["display"] == expected.display
    assert body["body_fat"] == pytest.approx(expected.percentage, abs=0.05)
    assert body["status"] == "neutral"


def test_api_accepts_numbers(client):
    payload = dict(sex="male", weight=80, height=180, waist=85, neck=38, age=30)
    body = client.post("/api/estimate", json=payload).get_json()
    assert body["ok"] is True


def test_api_validation_error(client):
    resp = client.post("/api/estimate", json=dict(FEMALE, hip=None))
    assert resp.status_code == 422
    body = resp.get_json()
    assert body == {
        "ok": False,
        "error": "INVALID_HIP",
        "field": "hip",
        "message": InputError.INVALID_HIP.message,
        "status_message": InputError.INVALID_HIP.message,
        "status": "failure",
    }


def test_api_degenerate_input(client):
    resp = client.post("/api/estimate", json=dict(MALE, waist="40", neck="40"))
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "MALE_CIRCUMFERENCE_ISSUE"
    assert body["field"] is None
    assert body["status_message"] == "Check waist/neck input."


@pytest.mark.parametrize("data", ["not json", "[1, 2]"])
def test_api_rejects_non_object_body(client, data):
    resp = client.post("/api/estimate", data=data, content_type="application/json")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "GENERIC_INVALID_INPUT"
    assert body["field"] is None


def test_denormal_height_is_a_422_not_a_500(client):
    resp = client.post("/api/estimate", json=dict(MALE, height="5e-324"))
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "DIVISION_BY_ZERO"

    page = client.post("/", data=dict(MALE, height="5e-324"))
    assert page.status_code == 200
    assert "status failure" in page.get_data(as_text=True)


@pytest.mark.parametrize(
    "name, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" info ", logging.INFO), ("verbose", logging.INFO), ("", logging.INFO)],
)
def test_log_level_falls_back_to_info(name, expected):
    assert log_level(name) == expected
