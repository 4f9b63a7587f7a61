"""Photos tab: upload form and photo grid."""

import requests
import streamlit as st
import structlog

from lovememories.models.memory import Photo
from lovememories.services.api_client import LoveMemoriesClient, describe_http_error
from lovememories.ui.components.common import format_date, render_empty_state, render_error_message

logger = structlog.get_logger(__name__)

UPLOAD_TYPES = ["jpg", "jpeg", "png", "gif", "heic"]
GRID_COLUMNS = 3


def render_upload_form(client: LoveMemoriesClient) -> None:
    """Render the upload form inside an expander."""
    with st.expander("📤 Ajouter une photo"):
        with st.form("upload_photo_form", clear_on_submit=True):
            uploaded_file = st.file_uploader("Photo", type=UPLOAD_TYPES)
            caption = st.text_input("Légende (optionnelle)")
            submitted = st.form_submit_button("Ajouter", type="primary")

        if not submitted:
            return

        if uploaded_file is None:
            st.warning("Veuillez choisir une photo.")
            return

        try:
            client.upload_photo(
                uploaded_file.getvalue(),
                uploaded_file.name,
                uploaded_file.type or "application/octet-stream",
                caption.strip() or None,
            )
        except requests.HTTPError as e:
            render_error_message("Erreur", "Impossible d'ajouter la photo.", describe_http_error(e))
            return
        except requests.RequestException as e:
            logger.error("photo_upload_failed", error=str(e))
            render_error_message("Erreur", "Le serveur est injoignable.", str(e))
            return

        st.toast("Photo ajoutée avec succès.", icon="📸")


def render_photo_card(client: LoveMemoriesClient, photo: Photo) -> None:
    """Render one photo with its caption, date and delete button."""
    st.image(client.photo_url(photo), use_container_width=True)
    if photo.caption:
        st.markdown(f"**{photo.caption}**")
    st.caption(format_date(photo.date))

    if st.button("🗑️ Supprimer", key=f"delete_photo_{photo.id}", use_container_width=True):
        try:
            client.delete_photo(photo.id)
        except requests.RequestException as e:
            logger.error("photo_delete_failed", photo_id=photo.id, error=str(e))
            st.toast("Impossible de supprimer la photo.", icon="⚠️")
            return
        st.toast("La photo a été supprimée avec succès.", icon="🗑️")
        st.rerun()


def render_photos_page(client: LoveMemoriesClient, search_query: str) -> None:
    """
    Render the photos tab.

    Args:
        client: API client on the unlocked gate's dispatcher
        search_query: Caption filter, empty for all photos
    """
    render_upload_form(client)

    try:
        photos = client.list_photos(search_query or None)
    except requests.RequestException as e:
        logger.error("photos_load_failed", error=str(e))
        render_error_message("Erreur", "Une erreur est survenue lors du chargement des photos.", str(e))
        return

    if not photos:
        if search_query:
            render_empty_state("Aucun résultat", "Aucune photo ne correspond à votre recherche.", icon="🔍")
        else:
            render_empty_state("Aucune photo", "Ajoutez votre première photo !", icon="📷")
        return

    columns = st.columns(GRID_COLUMNS)
    for index, photo in enumerate(photos):
        with columns[index % GRID_COLUMNS]:
            render_photo_card(client, photo)
