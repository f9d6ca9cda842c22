from types import SimpleNamespace

import pytest

from thumbnail_api.errors import NotFound
from thumbnail_api.models import Thumbnail
from thumbnail_api.reconciler import mark_failed, mark_succeeded
from thumbnail_api.service import create_thumbnail, delete_thumbnail, get_thumbnail


@pytest.fixture()
def pending(make_thumbnail):
    return make_thumbnail(title="T", is_generating=True, image_url=None)


def _request(**kwargs):
    values = dict(title="T", prompt=None, style="Minimalist", aspect_ratio="16:9", color_scheme=None, text_overlay=False)
    values.update(kwargs)
    return SimpleNamespace(**values)


def test_new_record_is_pending(db_session, owner_id):
    thumbnail = Thumbnail(user_id=owner_id, title="T", style="Minimalist", aspect_ratio="16:9")
    db_session.add(thumbnail)
    db_session.commit()
    db_session.refresh(thumbnail)

    assert thumbnail.is_generating is True
    assert thumbnail.image_url is None
    assert thumbnail.status == "pending"


def test_success_is_terminal(db_session, pending, image_url):
    assert mark_succeeded(db_session, pending.id, image_url) is True
    assert mark_failed(db_session, pending.id) is False
    assert mark_succeeded(db_session, pending.id, "https://example.com/other.png") is False

    db_session.refresh(pending)
    assert pending.is_generating is False
    assert pending.image_url == image_url
    assert pending.status == "succeeded"


def test_failure_is_terminal(db_session, pending, image_url):
    assert mark_failed(db_session, pending.id) is True
    assert mark_succeeded(db_session, pending.id, image_url) is False

    db_session.refresh(pending)
    assert pending.is_generating is False
    assert pending.image_url is None
    assert pending.status == "failed"


def test_create_thumbnail_failure_reconciles(db_session, owner_id, mock_generator, mock_publisher):
    mock_publisher.publish.side_effect = OSError("disk full")

    with pytest.raises(OSError):
        create_thumbnail(db_session, owner_id, _request(), mock_generator, mock_publisher)

    thumbnail = db_session.query(Thumbnail).one()
    assert thumbnail.status == "failed"


def test_create_thumbnail_deleted_while_generating(db_session, owner_id, mock_generator, mock_publisher, png_bytes):
    def delete_then_return(prompt):
        db_session.query(Thumbnail).delete()
        db_session.commit()
        return png_bytes

    mock_generator.generate.side_effect = delete_then_return

    with pytest.raises(NotFound):
        create_thumbnail(db_session, owner_id, _request(), mock_generator, mock_publisher)

    assert db_session.query(Thumbnail).count() == 0


def test_create_thumbnail_records_inputs(db_session, owner_id, mock_generator, mock_publisher):
    request = _request(prompt="a rocket", color_scheme="neon", text_overlay=True)

    thumbnail = create_thumbnail(db_session, owner_id, request, mock_generator, mock_publisher)

    assert thumbnail.user_id == owner_id
    assert thumbnail.user_prompt == "a rocket"
    assert thumbnail.color_scheme == "neon"
    assert thumbnail.text_overlay is True
    assert "Additional details: a rocket." in thumbnail.prompt_used
    assert thumbnail.status == "succeeded"


def test_owner_scoping(db_session, pending, owner_id, other_owner_id):
    assert get_thumbnail(db_session, owner_id, pending.id).id == pending.id
    with pytest.raises(NotFound):
        get_thumbnail(db_session, other_owner_id, pending.id)

    assert delete_thumbnail(db_session, other_owner_id, pending.id) is False
    assert delete_thumbnail(db_session, owner_id, str(pending.id)) is True
    assert delete_thumbnail(db_session, owner_id, "garbage") is False
