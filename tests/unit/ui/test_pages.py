"""Tests for the photos and notes tabs."""

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from lovememories.models.memory import Note, Photo
from lovememories.ui.components import common
from lovememories.ui.pages import notes, photos

PHOTO = Photo(id=1, filename="1700000000000-1.png", caption="Sunset", date=datetime(2024, 2, 14, tzinfo=UTC))
NOTE = Note(id=2, title="Trip", content="Rome in May", date=datetime(2024, 2, 14, tzinfo=UTC))


@pytest.fixture(autouse=True)
def patched_st(mock_st):
    with patch.object(photos, "st", mock_st), patch.object(notes, "st", mock_st), patch.object(
        common, "st", mock_st
    ):
        yield mock_st


@pytest.fixture
def client():
    client = MagicMock()
    client.photo_url.return_value = "http://localhost:8000/api/uploads/1700000000000-1.png"
    return client


class TestPhotosPage:
    """Test cases for the photos tab."""

    def test_lists_photos_with_search(self, patched_st, client):
        client.list_photos.return_value = [PHOTO]

        photos.render_photos_page(client, "sun")

        client.list_photos.assert_called_once_with("sun")
        patched_st.image.assert_called_once_with(client.photo_url.return_value, use_container_width=True)

    def test_empty_search_lists_all(self, client):
        client.list_photos.return_value = []

        photos.render_photos_page(client, "")

        client.list_photos.assert_called_once_with(None)

    def test_empty_state(self, patched_st, client):
        client.list_photos.return_value = []

        photos.render_photos_page(client, "")

        assert "Aucune photo" in patched_st.markdown.call_args.args[0]

    def test_load_error(self, patched_st, client):
        client.list_photos.side_effect = requests.ConnectionError("refused")

        photos.render_photos_page(client, "")

        patched_st.error.assert_called_once()

    def test_delete_button(self, patched_st, client):
        patched_st.button.return_value = True

        photos.render_photo_card(client, PHOTO)

        client.delete_photo.assert_called_once_with(1)
        patched_st.rerun.assert_called_once()

    def test_upload_submitted(self, patched_st, client):
        uploaded = MagicMock()
        uploaded.getvalue.return_value = b"png"
        uploaded.name = "sunset.png"
        uploaded.type = "image/png"
        patched_st.file_uploader.return_value = uploaded
        patched_st.text_input.return_value = "  Sunset "
        patched_st.form_submit_button.return_value = True

        photos.render_upload_form(client)

        client.upload_photo.assert_called_once_with(b"png", "sunset.png", "image/png", "Sunset")
        patched_st.toast.assert_called_once()

    def test_upload_without_file(self, patched_st, client):
        patched_st.file_uploader.return_value = None
        patched_st.form_submit_button.return_value = True

        photos.render_upload_form(client)

        client.upload_photo.assert_not_called()
        patched_st.warning.assert_called_once()


class TestNotesPage:
    """Test cases for the notes tab."""

    def test_lists_notes(self, patched_st, client):
        client.list_notes.return_value = [NOTE]

        notes.render_notes_page(client, "trip")

        client.list_notes.assert_called_once_with("trip")
        patched_st.write.assert_called_once_with("Rome in May")

    def test_no_search_result(self, patched_st, client):
        client.list_notes.return_value = []

        notes.render_notes_page(client, "zzz")

        assert "Aucun résultat" in patched_st.markdown.call_args.args[0]

    def test_create_note(self, patched_st, client):
        patched_st.text_input.return_value = " Trip "
        patched_st.text_area.return_value = "Rome"
        patched_st.form_submit_button.return_value = True

        notes.render_new_note_form(client)

        client.create_note.assert_called_once_with("Trip", "Rome")

    def test_create_note_requires_fields(self, patched_st, client):
        patched_st.text_input.return_value = "Trip"
        patched_st.text_area.return_value = "   "
        patched_st.form_submit_button.return_value = True

        notes.render_new_note_form(client)

        client.create_note.assert_not_called()
        patched_st.warning.assert_called_once()

    def test_edit_mode_renders_form(self, patched_st, client):
        patched_st.session_state.editing_note_id = NOTE.id

        notes.render_note_card(client, NOTE)

        patched_st.form.assert_called_once_with(f"edit_note_form_{NOTE.id}")

    def test_save_edit(self, patched_st, client):
        patched_st.session_state.editing_note_id = NOTE.id
        patched_st.text_input.return_value = "Trip to Rome"
        patched_st.text_area.return_value = "Rome in May"
        patched_st.form_submit_button.side_effect = [True, False]

        notes.render_edit_note_form(client, NOTE)

        client.update_note.assert_called_once_with(NOTE.id, title="Trip to Rome", content="Rome in May")
        assert patched_st.session_state.editing_note_id is None
