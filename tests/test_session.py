"""Tests EditorSession — mutations historisées, requêtes collaborateur."""
import threading

import pytest
from pydantic import ValidationError

from email_builder import EditorSession
from email_builder.core.schemas import DocumentChange, EmailDocument
from email_builder.errors import MutationInFlightError, RequestClosedError
from email_builder.history import SaveStatus


@pytest.fixture
def session(build):
    return EditorSession(EmailDocument(blocks=build("heading", "text", "footer")))


def _types(session):
    return [b.type for b in session.blocks]


# ── Mutations ────────────────────────────────────────────────────────────────

def test_empty_session():
    session = EditorSession()
    assert session.blocks == []
    assert not session.can_undo()


def test_insert_section_then_undo(session):
    result = session.insert_section("hero-with-cta")
    assert result.success
    assert _types(session) == ["heading", "text", "hero", "text", "button", "footer"]
    assert session.can_undo()
    session.undo()
    assert _types(session) == ["heading", "text", "footer"]
    session.redo()
    assert [b.id for b in session.blocks][2:5] == result.inserted_ids


def test_failed_insert_leaves_no_history(session):
    result = session.insert_section("hero-with-cta", "before", target_id="absent")
    assert not result.success
    assert result.error_code == "not_found"
    assert not session.can_undo()
    assert _types(session) == ["heading", "text", "footer"]


def test_insert_unknown_mode(session):
    with pytest.raises(ValueError):
        session.insert_section("hero-with-cta", "sideways")


def test_block_operations(session):
    heading_id = session.blocks[0].id
    assert session.move_block(heading_id, 1).success
    assert _types(session) == ["text", "heading", "footer"]
    assert session.update_block(heading_id, content={"text": "Nouveau"}).success
    assert session.blocks[1].content.text == "Nouveau"
    assert session.add_block("divider", 2).success
    assert _types(session) == ["text", "heading", "divider", "footer"]
    assert session.remove_block(heading_id).success
    assert _types(session) == ["text", "divider", "footer"]
    assert session.history.version == 4


def test_update_global_settings(session):
    settings = session.update_global_settings(max_width=640)
    assert settings.max_width == 640
    assert session.to_document().global_settings.max_width == 640
    session.undo()
    assert session.global_settings.max_width == 600


def test_invalid_global_settings_rejected(session):
    with pytest.raises(ValidationError):
        session.update_global_settings(background_color="gris")
    assert not session.can_undo()


# ── Composition ──────────────────────────────────────────────────────────────

def test_auto_fix_all_reports_change(build):
    session = EditorSession(EmailDocument(blocks=build("hero", "hero")))
    assert len(session.validate()) == 1
    assert session.auto_fix_all()
    assert _types(session) == ["hero", "spacer", "hero"]
    assert session.validate() == []
    assert session.score().score == 100
    assert not session.auto_fix_all()
    assert session.history.version == 1


def test_auto_fix_single(build):
    session = EditorSession(EmailDocument(blocks=build("footer", "text")))
    footer_id = session.blocks[0].id
    assert session.auto_fix(footer_id, "footer-last")
    assert _types(session) == ["text", "footer"]
    assert not session.auto_fix(footer_id, "footer-last")


def test_render(session):
    email = session.render(merge_tags={"unsubscribe_url": "https://example.com/u"})
    assert all(f'data-block-id="{b.id}"' in email.html for b in session.blocks)
    assert 'href="https://example.com/u"' in email.html


# ── Collaborateurs ───────────────────────────────────────────────────────────

def test_apply_patches_single_history_entry(session):
    heading, text, _ = session.blocks
    result = session.apply_change({"patches": [
        {"block_id": heading.id, "content": {"text": "Titre IA"}},
        {"block_id": text.id, "settings": {"color": "#111111"}},
    ]})
    assert result.success
    assert result.inserted_ids == [heading.id, text.id]
    assert session.blocks[0].content.text == "Titre IA"
    assert session.blocks[1].settings.color == "#111111"
    assert session.history.version == 1
    session.undo()
    assert session.blocks[0] == heading
    assert session.blocks[1] == text


def test_apply_full_document(session, build):
    document = EmailDocument(blocks=build("hero", "footer"))
    result = session.apply_change(DocumentChange(document=document))
    assert result.success
    assert _types(session) == ["hero", "footer"]
    session.undo()
    assert _types(session) == ["heading", "text", "footer"]


def test_apply_patch_missing_block(session):
    before = session.snapshot
    result = session.apply_change({"patches": [
        {"block_id": session.blocks[0].id, "content": {"text": "x"}},
        {"block_id": "absent", "content": {"text": "y"}},
    ]})
    assert not result.success
    assert result.error_code == "not_found"
    assert session.snapshot is before
    assert not session.can_undo()


def test_apply_invalid_patch_releases_gate(session):
    with pytest.raises(ValidationError):
        session.apply_change({"patches": [{"block_id": session.blocks[1].id, "settings": {"color": "rouge"}}]})
    assert session.apply_change({"patches": [{"block_id": session.blocks[1].id,
                                              "content": {"text": "ok"}}]}).success


def test_change_needs_document_or_patches(session):
    with pytest.raises(ValidationError):
        session.apply_change({})


def test_concurrent_request_rejected(session):
    with session.collaborator_request() as request:
        assert request.snapshot is session.snapshot
        with pytest.raises(MutationInFlightError):
            session.apply_change({"patches": [{"block_id": session.blocks[0].id, "content": {"text": "x"}}]})
    assert session.apply_change({"patches": [{"block_id": session.blocks[0].id,
                                              "content": {"text": "x"}}]}).success


def test_request_from_other_thread_rejected(session):
    holding = threading.Event()
    release = threading.Event()

    def collaborator():
        with session.collaborator_request():
            holding.set()
            release.wait(5)

    worker = threading.Thread(target=collaborator)
    worker.start()
    try:
        assert holding.wait(5)
        with pytest.raises(MutationInFlightError):
            with session.collaborator_request():
                pass
    finally:
        release.set()
        worker.join(5)


def test_request_applies_once(session):
    block_id = session.blocks[0].id
    with session.collaborator_request() as request:
        assert request.apply({"patches": [{"block_id": block_id, "content": {"text": "a"}}]}).success
        with pytest.raises(MutationInFlightError):
            request.apply({"patches": [{"block_id": block_id, "content": {"text": "b"}}]})
    assert session.blocks[0].content.text == "a"


def test_request_unusable_after_block(session):
    block_id = session.blocks[0].id
    before = session.snapshot
    with session.collaborator_request() as request:
        assert not request.closed
    assert request.closed
    with pytest.raises(RequestClosedError):
        request.apply({"patches": [{"block_id": block_id, "content": {"text": "late"}}]})
    with pytest.raises(RequestClosedError):
        request.snapshot
    assert session.snapshot is before
    assert not session.can_undo()


def test_request_closed_after_error(session):
    with pytest.raises(RuntimeError):
        with session.collaborator_request() as request:
            raise RuntimeError("collaborateur indisponible")
    assert request.closed
    with session.collaborator_request() as other:
        assert not other.closed


# ── Sauvegarde ───────────────────────────────────────────────────────────────

def test_mutations_are_persisted(build, sync_spawn):
    saved = []
    session = EditorSession(EmailDocument(blocks=build("text")),
                            persist=lambda snapshot, version: saved.append((version, len(snapshot.blocks))),
                            spawn=sync_spawn)
    session.insert_section("social-proof")
    session.undo()
    session.remove_block(session.blocks[0].id)
    assert saved == [(1, 4), (2, 0)]
    assert session.history.persistence.status == SaveStatus.SUCCEEDED
