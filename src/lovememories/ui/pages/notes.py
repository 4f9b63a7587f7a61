"""Notes tab: note creation and the editable list."""

import requests
import streamlit as st
import structlog

from lovememories.models.memory import Note
from lovememories.services.api_client import LoveMemoriesClient, describe_http_error
from lovememories.ui.components.common import format_date, render_empty_state, render_error_message

logger = structlog.get_logger(__name__)


def render_new_note_form(client: LoveMemoriesClient) -> None:
    with st.expander("✏️ Nouvelle note"):
        with st.form("new_note_form", clear_on_submit=True):
            title = st.text_input("Titre")
            content = st.text_area("Contenu")
            submitted = st.form_submit_button("Enregistrer", type="primary")

        if not submitted:
            return

        if not title.strip() or not content.strip():
            st.warning("Le titre et le contenu sont obligatoires.")
            return

        try:
            client.create_note(title.strip(), content.strip())
        except requests.HTTPError as e:
            render_error_message("Erreur", "Impossible de créer la note.", describe_http_error(e))
            return
        except requests.RequestException as e:
            logger.error("note_create_failed", error=str(e))
            render_error_message("Erreur", "Le serveur est injoignable.", str(e))
            return

        st.toast("Note créée avec succès.", icon="📝")


def render_edit_note_form(client: LoveMemoriesClient, note: Note) -> None:
    """Render the edit form of one note; saving bumps its date."""
    with st.form(f"edit_note_form_{note.id}"):
        title = st.text_input("Titre", value=note.title)
        content = st.text_area("Contenu", value=note.content)
        save_col, cancel_col = st.columns(2)
        with save_col:
            saved = st.form_submit_button("Enregistrer", type="primary", use_container_width=True)
        with cancel_col:
            cancelled = st.form_submit_button("Annuler", use_container_width=True)

    if cancelled:
        st.session_state.editing_note_id = None
        st.rerun()

    if saved:
        if not title.strip() or not content.strip():
            st.warning("Le titre et le contenu sont obligatoires.")
            return
        try:
            client.update_note(note.id, title=title.strip(), content=content.strip())
        except requests.RequestException as e:
            logger.error("note_update_failed", note_id=note.id, error=str(e))
            st.toast("Impossible de modifier la note.", icon="⚠️")
            return
        st.session_state.editing_note_id = None
        st.toast("Note modifiée avec succès.", icon="✅")
        st.rerun()


def render_note_card(client: LoveMemoriesClient, note: Note) -> None:
    with st.container(border=True):
        if st.session_state.get("editing_note_id") == note.id:
            render_edit_note_form(client, note)
            return

        st.markdown(f"#### {note.title}")
        st.caption(format_date(note.date))
        st.write(note.content)

        edit_col, delete_col = st.columns(2)
        with edit_col:
            if st.button("✏️ Modifier", key=f"edit_note_{note.id}", use_container_width=True):
                st.session_state.editing_note_id = note.id
                st.rerun()
        with delete_col:
            if st.button("🗑️ Supprimer", key=f"delete_note_{note.id}", use_container_width=True):
                try:
                    client.delete_note(note.id)
                except requests.RequestException as e:
                    logger.error("note_delete_failed", note_id=note.id, error=str(e))
                    st.toast("Impossible de supprimer la note.", icon="⚠️")
                    return
                st.toast("La note a été supprimée avec succès.", icon="🗑️")
                st.rerun()


def render_notes_page(client: LoveMemoriesClient, search_query: str) -> None:
    """
    Render the notes tab.

    Args:
        client: API client on the unlocked gate's dispatcher
        search_query: Title filter, empty for all notes
    """
    render_new_note_form(client)

    try:
        notes = client.list_notes(search_query or None)
    except requests.RequestException as e:
        logger.error("notes_load_failed", error=str(e))
        render_error_message("Erreur", "Une erreur est survenue lors du chargement des notes.", str(e))
        return

    if not notes:
        if search_query:
            render_empty_state("Aucun résultat", "Aucune note ne correspond à votre recherche.", icon="🔍")
        else:
            render_empty_state("Aucune note", "Écrivez votre première note !", icon="📝")
        return

    for note in notes:
        render_note_card(client, note)
