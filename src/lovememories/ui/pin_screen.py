"""PIN screen shown until the application is unlocked."""

import time

import streamlit as st

from lovememories.services.auth import PinGate

KEYPAD_ROWS = [["1", "2", "3"], ["4", "5", "6"], ["7", "8", "9"], ["", "0", "del"]]


def render_pin_dots(entered: int, total: int) -> None:
    """Render one dot per digit, filled for the digits already typed."""
    dots = " ".join("●" if index < entered else "○" for index in range(total))
    st.markdown(f"<div style='text-align: center; font-size: 1.5rem;'>{dots}</div>", unsafe_allow_html=True)


def render_keypad(gate: PinGate) -> None:
    """Render the 3x4 keypad; keys update the gate through callbacks."""
    for row in KEYPAD_ROWS:
        columns = st.columns(3)
        for column, key in zip(columns, row):
            with column:
                if key == "del":
                    st.button("⌫", key="pin_key_del", on_click=gate.delete_digit, use_container_width=True)
                elif key:
                    st.button(
                        key,
                        key=f"pin_key_{key}",
                        on_click=gate.press_digit,
                        args=(key,),
                        use_container_width=True,
                    )


def render_pin_screen(gate: PinGate) -> bool:
    """
    Render the PIN screen unless the gate is unlocked.

    Nothing else may be rendered or fetched while this returns False.

    Returns:
        bool: True if the application is unlocked
    """
    if gate.is_unlocked:
        return True

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown("<h1 style='text-align: center;'>💕 LoveMemories</h1>", unsafe_allow_html=True)
        st.markdown(
            "<p style='text-align: center; color: #888;'>Veuillez entrer votre code PIN</p>",
            unsafe_allow_html=True,
        )

        render_pin_dots(gate.entered_length, gate.pin_length)
        render_keypad(gate)

        if gate.error_visible:
            st.error("Code PIN incorrect, veuillez réessayer.")

    # A rejected entry stays visible for the error delay, then the screen refreshes empty.
    # A key pressed during the wait is applied after this run ends; the gate then
    # drops the rejected entry before adding the key.
    remaining = gate.remaining_error_delay()
    if remaining is not None:
        time.sleep(remaining)
        st.rerun()

    return False
