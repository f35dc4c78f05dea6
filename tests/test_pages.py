from tests.conftest import StubDocumentRepository, at, make_document


def test_pages_redirect_to_signin_without_identity(api):
    repository = StubDocumentRepository()
    api.login_as(None)
    api.use_documents(repository)

    for path in ("/app", "/app/new", "/app/documents"):
        response = api.client.get(path, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/signin"

    assert repository.find_calls == []


def test_new_analysis_page_renders_upload_form(api, owner):
    api.login_as(owner)

    response = api.client.get("/app/new")

    assert response.status_code == 200
    assert "Start New CV Analysis" in response.text
    assert 'action="/api/upload"' in response.text
    assert 'enctype="multipart/form-data"' in response.text
    assert "New Analysis | MatchMyCV" in response.text
    assert owner.name in response.text


def test_dashboard_lists_recent_documents(api, owner):
    documents = [make_document(owner, f"CV {i}", at(i)) for i in range(7)]
    api.login_as(owner)
    api.use_documents(StubDocumentRepository(documents))

    response = api.client.get("/app")

    assert response.status_code == 200
    assert "You have 7 documents" in response.text
    assert "CV 6" in response.text
    assert "CV 1" not in response.text


def test_documents_page(api, owner):
    document = make_document(owner, "Resume", at(0), versions=[("Original", at(0))])
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.get("/app/documents")

    assert response.status_code == 200
    assert "My Documents | MatchMyCV" in response.text
    assert "Resume" in response.text
    assert "Original" in response.text


def test_signin_page_is_public(api):
    api.login_as(None)

    response = api.client.get("/auth/signin")

    assert response.status_code == 200
    assert 'action="/auth/signin"' in response.text


def test_root_redirects_to_app(api):
    response = api.client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/app"
