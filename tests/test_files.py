import pytest


@pytest.fixture
def file_reference():
    yield {
        "publicId": "devdrop_files/logo.v2",
        "name": "logo.v2.png",
        "url": "https://res.cloudinary.com/demo/image/upload/devdrop_files/logo.v2.png",
        "resourceType": "image",
        "bytes": 2048,
        "format": "png",
    }


def test_attach_file(tester, create_note, file_reference) -> None:
    note = create_note("assets")

    response = tester.post(url=f"/notes/{note['id']}/files", json=file_reference)

    assert response.status_code == 201
    attached = response.json()
    assert attached["publicId"] == "devdrop_files/logo.v2"
    assert attached["bytes"] == 2048
    assert attached["format"] == "png"
    assert attached["uploadedAt"] > 0

    files = tester.get(url=f"/notes/{note['id']}/files").json()
    assert list(files) == ["devdrop_files_logo_v2"]
    assert tester.get(url=f"/notes/{note['id']}").json()["files"] == files


def test_attach_same_file_twice_replaces_reference(
    tester, create_note, file_reference
) -> None:
    note = create_note("assets")
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)

    file_reference["name"] = "renamed.png"
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)

    files = tester.get(url=f"/notes/{note['id']}/files").json()
    assert len(files) == 1
    assert files["devdrop_files_logo_v2"]["name"] == "renamed.png"


def test_attach_file_to_missing_note(tester, file_reference) -> None:
    response = tester.post(url="/notes/missing/files", json=file_reference)

    assert response.status_code == 404


def test_upload_file(tester, create_note, fake_cloudinary) -> None:
    note = create_note("assets")

    response = tester.post(
        url=f"/notes/{note['id']}/files/upload",
        json={"file": "data:text/plain;base64,aGVsbG8gd29ybGQh", "name": "hello.txt"},
    )

    assert response.status_code == 201
    assert response.json()["name"] == "hello.txt"
    assert response.json()["resourceType"] == "raw"
    file, options = fake_cloudinary.uploads[0]
    assert file == "data:text/plain;base64,aGVsbG8gd29ybGQh"
    assert options["folder"] == "devdrop_files"
    assert "devdrop_files_snippet1" in tester.get(url=f"/notes/{note['id']}/files").json()


def test_upload_file_media_failure(tester, create_note, fake_cloudinary) -> None:
    note = create_note("assets")
    fake_cloudinary.fail = True

    response = tester.post(
        url=f"/notes/{note['id']}/files/upload", json={"file": "https://example.com/a.txt"}
    )

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "Failed to upload file."}


def test_delete_file(tester, create_note, file_reference, fake_cloudinary) -> None:
    note = create_note("assets")
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)

    response = tester.delete(url=f"/notes/{note['id']}/files/devdrop_files_logo_v2")

    assert response.status_code == 200
    assert fake_cloudinary.destroyed == [
        ("devdrop_files/logo.v2", {"resource_type": "image"})
    ]
    assert tester.get(url=f"/notes/{note['id']}/files").json() == {}


def test_delete_file_keeps_reference_when_media_fails(
    tester, create_note, file_reference, fake_cloudinary
) -> None:
    note = create_note("assets")
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)
    fake_cloudinary.fail = True

    response = tester.delete(url=f"/notes/{note['id']}/files/devdrop_files_logo_v2")

    assert response.status_code == 502
    assert "devdrop_files_logo_v2" in tester.get(url=f"/notes/{note['id']}/files").json()


def test_delete_unknown_file(tester, create_note) -> None:
    note = create_note("assets")

    response = tester.delete(url=f"/notes/{note['id']}/files/nothing")

    assert response.status_code == 404
    assert response.json()["error"] == "File not found: nothing"


def test_delete_note_deletes_its_media(
    tester, create_note, file_reference, fake_cloudinary
) -> None:
    note = create_note("assets")
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)
    tester.post(
        url=f"/notes/{note['id']}/files/upload", json={"file": "https://example.com/a.txt"}
    )

    response = tester.delete(url=f"/notes/{note['id']}")

    assert response.status_code == 200
    deleted = sorted(
        (public_ids, options["resource_type"])
        for public_ids, options in fake_cloudinary.bulk_deleted
    )
    assert deleted == [
        (["devdrop_files/logo.v2"], "image"),
        (["devdrop_files/snippet1"], "raw"),
    ]
    assert tester.get(url=f"/notes/{note['id']}").status_code == 404


def test_delete_note_kept_when_media_fails(
    tester, create_note, file_reference, fake_cloudinary
) -> None:
    note = create_note("assets")
    tester.post(url=f"/notes/{note['id']}/files", json=file_reference)
    fake_cloudinary.fail = True

    response = tester.delete(url=f"/notes/{note['id']}")

    assert response.status_code == 502
    assert response.json()["error"] == "Failed to delete attached files."
    assert tester.get(url=f"/notes/{note['id']}").status_code == 200
