from hire_api.core.config import Settings


def test_cors_origins_from_comma_list():
    s = Settings(_env_file=None, CORS_ORIGINS='http://a.test, http://b.test')
    assert s.CORS_ORIGINS == ['http://a.test', 'http://b.test']


def test_cors_origins_from_json(monkeypatch):
    monkeypatch.setenv('CORS_ORIGINS', '["http://a.test"]')
    assert Settings(_env_file=None).CORS_ORIGINS == ['http://a.test']


def test_cors_allow_all(monkeypatch):
    monkeypatch.setenv('CORS_ALLOW_ALL', 'true')
    assert Settings(_env_file=None).CORS_ORIGINS == ['*']


def test_currency_and_password_are_normalised(monkeypatch):
    monkeypatch.setenv('DEFAULT_CURRENCY', ' gbp ')
    monkeypatch.setenv('ADMIN_PASSWORD', '  hunter2 ')
    s = Settings(_env_file=None)
    assert s.DEFAULT_CURRENCY == 'GBP'
    assert s.ADMIN_PASSWORD == 'hunter2'
