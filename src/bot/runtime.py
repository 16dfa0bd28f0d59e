#!/usr/bin/python

from typing import Optional
import logging

import discord

# Local imports
from src.core.dates import format_countdown
from src.core.errors import PuzzleError
from src.core.evaluator import suggest
from src.core.models import ATTRIBUTES, DisplayRow, Feedback, Outcome, Stats
from src.core.session import PuzzleSession
from src.core.share import format_ordinal

logger = logging.getLogger(__name__)

HEADERS = {
    "name": "Name",
    "region": "Region",
    "type": "Type",
    "damage": "Damage",
    "has_special_trait": "Remembrance",
}

FEEDBACK_MARKERS = {
    Feedback.MATCH: "🟩",
    Feedback.PARTIAL: "🟨",
    Feedback.MISS: "⬛",
}

GENERIC_FAILURE = "Something went wrong handling that guess. Please try again."

# -----------------------------------------------------------------------------
# Rendering helpers
# -----------------------------------------------------------------------------

def format_value(value) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value) if value else "—"

def format_row(index: int, row: DisplayRow) -> str:
    cells = []
    for attr in ATTRIBUTES:
        marker = FEEDBACK_MARKERS[row.feedback[attr]]
        cells.append(f"{marker} {format_value(getattr(row.attempt, attr))}")
    return f"`{index}.` " + " · ".join(cells)

def build_board_embed(session: PuzzleSession) -> discord.Embed:
    """Board for the current puzzle: one line per guess, answer and share block once it is over."""
    outcome = session.get_outcome()
    rows = session.get_display_rows()
    title = f"{session.config.label}: {format_ordinal(session.puzzle_number)}"
    if session.test_mode:
        title += " (test mode)"

    if outcome is Outcome.WON:
        description, color = "You Win!", discord.Color.green()
    elif outcome is Outcome.LOST:
        description, color = "You Lose!", discord.Color.red()
    else:
        description = f"Attempts left: {session.attempts_left}/{session.config.max_attempts}"
        color = discord.Color.blurple()

    embed = discord.Embed(title=title, description=description, color=color)
    embed.add_field(
        name=" · ".join(HEADERS[a] for a in ATTRIBUTES),
        value="\n".join(format_row(i, r) for i, r in enumerate(rows, start=1)) or "No guesses yet. Use `!guess <boss>`.",
        inline=False,
    )

    if outcome.is_terminal:
        target = session.get_target()
        verb = "You guessed" if outcome is Outcome.WON else "The boss was"
        embed.add_field(name="Answer", value=f"{verb} **{target.name}**", inline=False)
        embed.add_field(name="Share", value=session.get_share_text(), inline=False)
        embed.set_footer(text=f"Next boss in {format_countdown(session.time_until_next())}")
    return embed

def build_stats_embed(stats: Stats) -> discord.Embed:
    embed = discord.Embed(title="Bossdle Stats", color=discord.Color.blurple())
    embed.add_field(name="Streak", value=str(stats.streak), inline=True)
    embed.add_field(name="Wins", value=str(stats.wins), inline=True)
    embed.add_field(name="Played", value=str(stats.played), inline=True)
    return embed

def _print_embed(embed: discord.Embed) -> None:
    print("==== Reply (DEBUG) ====")
    title = getattr(embed, "title", None) or ""
    desc = getattr(embed, "description", None) or ""
    print(f"Title: {title}")
    if desc:
        print(f"Description: {desc}")
    for f in getattr(embed, "fields", []) or []:
        name = getattr(f, "name", "")
        value = getattr(f, "value", "")
        print(f"\n{name}\n{'-' * len(name)}\n{value}")
    footer = getattr(getattr(embed, "footer", None), "text", None)
    if footer:
        print(f"\nFooter: {footer}")
    print("==== End Reply (DEBUG) ====")

async def send_reply(text_channel, content: Optional[str] = None, embed: Optional[discord.Embed] = None,
                     send_results: bool = True):
    """Send to Discord, or pretty-print to stdout when sending is disabled."""
    if not send_results:
        if content:
            print(content)
        if embed is not None:
            _print_embed(embed)
        return
    await text_channel.send(content=content, embed=embed)

# -----------------------------------------------------------------------------
# Command handlers
# -----------------------------------------------------------------------------

async def handle_guess(text_channel, session: PuzzleSession, raw_text: str, send_results: bool = True) -> bool:
    """
    Submit a guess and reply with the updated board.
    Returns True when the guess was accepted.
    """
    try:
        result = session.submit_guess(raw_text or "")
    except PuzzleError as e:
        logger.debug("handle_guess: rejected %r: %s", raw_text, e)
        await send_reply(text_channel, content=str(e), send_results=send_results)
        return False
    except Exception:
        logger.exception("handle_guess: unexpected failure for %r", raw_text)
        await send_reply(text_channel, content=GENERIC_FAILURE, send_results=send_results)
        return False

    await send_reply(text_channel, embed=build_board_embed(session), send_results=send_results)
    if result.outcome.is_terminal:
        await send_reply(text_channel, content=session.get_share_text(), send_results=send_results)
    else:
        await send_reply(text_channel, content="Try again!", send_results=send_results)
    return True

async def handle_board(text_channel, session: PuzzleSession, send_results: bool = True):
    await send_reply(text_channel, embed=build_board_embed(session), send_results=send_results)

async def handle_stats(text_channel, session: PuzzleSession, send_results: bool = True):
    await send_reply(text_channel, embed=build_stats_embed(session.get_stats()), send_results=send_results)

async def handle_share(text_channel, session: PuzzleSession, send_results: bool = True):
    try:
        text = session.get_share_text()
    except PuzzleError as e:
        await send_reply(text_channel, content=str(e), send_results=send_results)
        return
    await send_reply(text_channel, content=text, send_results=send_results)

async def handle_bosses(text_channel, session: PuzzleSession, prefix: str = "", send_results: bool = True,
                        limit: int = 25):
    names = suggest(prefix or "", session.catalog, limit=limit + 1)
    if not names:
        await send_reply(text_channel, content="No bosses match that.", send_results=send_results)
        return
    lines = names[:limit]
    if len(names) > limit:
        lines.append("…")
    await send_reply(text_channel, content="\n".join(lines), send_results=send_results)

async def handle_test_day(text_channel, session: PuzzleSession, send_results: bool = True):
    number = session.advance_test_day()
    await send_reply(text_channel, content=f"Test mode: advanced to {session.config.label} {format_ordinal(number)}",
                     send_results=send_results)

async def handle_real_day(text_channel, session: PuzzleSession, send_results: bool = True):
    number = session.reset_test_day()
    await send_reply(text_channel, content=f"Test mode off: back to {session.config.label} {format_ordinal(number)}",
                     send_results=send_results)

async def announce_new_puzzle(text_channel, session: PuzzleSession, send_results: bool = True):
    outcome = session.get_outcome()
    logger.info("announce_new_puzzle: %s %s (%s)", session.config.label, format_ordinal(session.puzzle_number), outcome.value)
    await send_reply(
        text_channel,
        content=f"A new boss awaits! {session.config.label} {format_ordinal(session.puzzle_number)} is live. Use `!guess <boss>`.",
        send_results=send_results,
    )
