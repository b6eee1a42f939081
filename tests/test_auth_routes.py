from models import Profile, User


def _signup(client, email="new@example.com", password="hunter22", company="Acme Dental"):
    return client.post("/auth/signup", data={
        "email": email,
        "password": password,
        "company_name": company,
        "niche": "dental-clinic",
        "description": "Family dentistry"
    })


def test_auth_page_renders(client):
    html = client.get("/auth").get_data(as_text=True)
    assert "Sign In" in html
    assert "Start Your Free Trial" in html


def test_signup_onboards_and_signs_in(client):
    response = _signup(client)

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")

    user = User.query.filter_by(email="new@example.com").one()
    profile = Profile.query.filter_by(user_id=user.id).one()
    assert profile.trial_start is not None
    assert profile.onboarding_completed is True

    html = client.get("/dashboard").get_data(as_text=True)
    assert "Welcome back, Acme Dental!" in html
    assert "Your 7-day free trial has started." in html


def test_signed_in_visitor_skips_auth_page(client):
    _signup(client)
    response = client.get("/auth")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")


def test_duplicate_signup_is_rejected(client, make_user):
    make_user(email="taken@example.com")

    response = _signup(client, email="taken@example.com")

    assert response.headers["Location"].endswith("/auth")
    assert User.query.filter_by(email="taken@example.com").count() == 1
    html = client.get("/auth").get_data(as_text=True)
    assert "User already exists" in html


def test_login_and_logout(client, make_user):
    make_user(email="owner@example.com", password="secret123")

    response = client.post("/auth/login", data={"email": "Owner@Example.com", "password": "secret123"})
    assert response.headers["Location"].endswith("/dashboard")
    assert client.get("/dashboard").status_code == 200

    response = client.post("/auth/logout")
    assert response.headers["Location"].endswith("/")
    assert client.get("/dashboard").status_code == 302
    assert client.get("/").status_code == 200


def test_login_with_wrong_password(client, make_user):
    make_user(email="owner@example.com", password="secret123")

    response = client.post("/auth/login", data={"email": "owner@example.com", "password": "wrong"})

    assert response.headers["Location"].endswith("/auth")
    assert client.get("/dashboard").status_code == 302
    assert "Invalid credentials" in client.get("/auth").get_data(as_text=True)


def test_api_signup_login_and_me(client):
    created = client.post("/api/auth/signup", json={"email": "api@example.com", "password": "pw123456"})
    assert created.status_code == 201

    login = client.post("/api/auth/login", json={"email": "api@example.com", "password": "pw123456"})
    token = login.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.get_json()["user"]["email"] == "api@example.com"


def test_api_signup_validation(client):
    assert client.post("/api/auth/signup", json={"email": "x@example.com"}).status_code == 400
    assert client.post("/api/auth/signup", data="not json").status_code == 400


def test_api_login_rejects_bad_credentials(client, make_user):
    make_user(email="owner@example.com", password="secret123")
    response = client.post("/api/auth/login", json={"email": "owner@example.com", "password": "nope"})
    assert response.status_code == 401


def test_api_rejects_tampered_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_api_signup_rejects_non_object_json(client):
    for body in (["x"], "x", 5):
        assert client.post("/api/auth/signup", json=body).status_code == 400
    assert User.query.count() == 0


def test_api_login_rejects_non_object_json(client, make_user):
    make_user()
    assert client.post("/api/auth/login", json=["owner@example.com", "secret123"]).status_code == 400


def test_signup_toast_follows_configured_trial_length(app, client):
    app.config["TRIAL_DAYS"] = 14
    _signup(client)
    html = client.get("/dashboard").get_data(as_text=True)
    assert "Your 14-day free trial has started." in html
