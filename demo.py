import random
import time

import streamlit as st
import numpy as np
import pandas as pd

from mc2048.benchmark import GameRecord, play_game


@st.cache_data
def agent_game(size: int, depth: int, seed: int) -> GameRecord:
    return play_game(size=size, depth=depth, rng=random.Random(seed))


# background per tile exponent: empty, 2, 4, ..., 2048
PALETTE = [
    "#CDC1B4", "#EEE4DA", "#EDE0C8", "#F2B179", "#F59563", "#F67C5F",
    "#F65E3B", "#EDCF72", "#EDCC61", "#EDC850", "#EDC53F", "#EDC22E",
]
BIG_TILE_COLOR = "#3C3A32"
BOARD_PX = 320


def tile_style(value: int, size: int) -> str:
    """Inline CSS for one tile, scaled so the whole board stays BOARD_PX wide."""
    exponent = value.bit_length() - 1 if value else 0
    background = PALETTE[exponent] if exponent < len(PALETTE) else BIG_TILE_COLOR
    color = "transparent" if value == 0 else "#F9F6F2" if value >= 8 else "#776E65"
    px = BOARD_PX // size
    # shrink the font as the number gets longer
    font = int(px * 0.45 / max(1, len(str(value)) - 1) ** 0.5)
    return (
        f"width: {px - 4}px; height: {px - 4}px; margin: 2px; border-radius: 3px; "
        f"display: flex; justify-content: center; align-items: center; "
        f"font-family: 'Arial', sans-serif; font-weight: bold; font-size: {font}px; "
        f"background-color: {background}; color: {color};"
    )


def display_2048_board(board):
    """Render an n x n board as HTML tiles; 0 is an empty cell."""
    size = len(board)
    s = '<div style="background-color: #BBADA0; border-radius: 6px; padding: 8px; width: fit-content;">'
    for row in board:
        s += '<div style="display: flex;">'
        for value in row:
            value = int(value)
            text = "" if value == 0 else str(value)
            s += f'<div style="{tile_style(value, size)}">{text}</div>'
        s += "</div>"
    s += "</div>"
    st.markdown(s, unsafe_allow_html=True)


def move_history(record: GameRecord) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "move": [m.name.lower() for m in record.moves],
            "score": record.scores[1:],
            "max tile": [int(np.max(s)) for s in record.states[1:]],
        }
    )


if __name__ == "__main__":
    st.title("2048 Monte Carlo Agent")

    with st.sidebar:
        size = st.number_input("Board size", min_value=4, max_value=8, value=4)
        depth = st.number_input("Rollouts per move", min_value=10, value=200, step=50)
        seed = st.number_input("Seed", min_value=0, value=0)

    if st.button("Regenerate") or "game" not in st.session_state:
        st.session_state.game = agent_game(int(size), int(depth), int(seed))
        st.session_state.index = 0

    record = st.session_state.game
    states = record.states

    cols = st.columns(4)
    with cols[0]:
        if st.button("Start"):
            st.session_state.index = 0
    with cols[1]:
        if st.button("Previous"):
            st.session_state.index = max(0, st.session_state.index - 1)
    with cols[2]:
        if st.button("Next"):
            st.session_state.index = min(len(states) - 1, st.session_state.index + 1)
    with cols[3]:
        if st.button("End"):
            st.session_state.index = len(states) - 1
    if st.button("Auto play"):
        st.session_state.auto_play = True

    index = st.session_state.index
    display_2048_board(states[index])

    st.markdown("---")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Moves made", index)
    with col2:
        st.metric("Score", record.scores[index])
    with col3:
        st.metric("Highest Tile", int(np.max(states[index])))

    st.dataframe(move_history(record))

    if "auto_play" in st.session_state and st.session_state.auto_play:
        if st.session_state.index == len(states) - 1:
            st.session_state.auto_play = False
        else:
            st.session_state.index += 1
            time.sleep(0.05)
            st.rerun()
