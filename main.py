#!/usr/bin/python
import os
import logging

import discord
from discord.ext import commands
from dotenv import load_dotenv
from src.bot.runtime import (
    announce_new_puzzle, handle_board, handle_bosses, handle_guess,
    handle_real_day, handle_share, handle_stats, handle_test_day,
)
from src.core.catalog import load_catalog_file
from src.core.scheduler import schedule_daily_rollover
from src.core.session import PuzzleSession
from src.core.storage import JsonFileStorage

load_dotenv()

CMD_PREFIX = '!'

# Logging setup
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

intents = discord.Intents(messages=True, message_content=True, guilds=True)
bot = commands.Bot(command_prefix=CMD_PREFIX, intents=intents)

def required_env(name: str) -> str:
    v = os.environ.get(name)
    if v is None or v == "":
        raise RuntimeError(f"Missing required env var: {name}")
    return v

def _env_bool(name: str, default: bool = False) -> bool:
    v = os.environ.get(name)
    if v is None:
        return default
    v = v.strip().lower()
    return v in ("1", "true", "t", "yes", "y", "on")


DISCORD_TOKEN = required_env("DISCORD_BOT_TOKEN")
GAME_CHANNEL_ID = int(required_env("GAME_CHANNEL_ID"))
PLAYER_ID = os.environ.get("PLAYER_ID")
CATALOG_PATH = os.environ.get("CATALOG_PATH", "bosses.json")
STATE_PATH = os.environ.get("STATE_PATH", "bossdle_state.json")
SEND_RESULTS = _env_bool("SEND_RESULTS", default=True)
ENABLE_TEST_COMMANDS = _env_bool("ENABLE_TEST_COMMANDS", default=False)
ANNOUNCE_DAILY = _env_bool("ANNOUNCE_DAILY", default=True)

# Single player, single session
SESSION = PuzzleSession(load_catalog_file(CATALOG_PATH), JsonFileStorage(STATE_PATH))


def _allowed(ctx) -> bool:
    if getattr(ctx.channel, "id", None) != GAME_CHANNEL_ID:
        return False
    if PLAYER_ID and str(getattr(ctx.author, "id", "")) != PLAYER_ID:
        logger.debug("ignoring command from non-player %s", ctx.author)
        return False
    return True


@bot.event
async def on_ready():
    logger.info("Bot is ready. Guilds: %s", [g.name for g in bot.guilds])
    if ANNOUNCE_DAILY:
        channel = bot.get_channel(GAME_CHANNEL_ID)
        schedule_daily_rollover(lambda: announce_new_puzzle(channel, SESSION, SEND_RESULTS),
                                job_id="announce_new_puzzle", dates=SESSION.dates)

@bot.command()
async def guess(ctx, *, arg: str = ""):
    if not _allowed(ctx):
        return
    logger.info("!guess invoked by %s: %r", ctx.author, arg)
    await handle_guess(ctx.channel, SESSION, arg, SEND_RESULTS)

@bot.command()
async def board(ctx):
    if _allowed(ctx):
        await handle_board(ctx.channel, SESSION, SEND_RESULTS)

@bot.command()
async def stats(ctx):
    if _allowed(ctx):
        await handle_stats(ctx.channel, SESSION, SEND_RESULTS)

@bot.command()
async def share(ctx):
    if _allowed(ctx):
        await handle_share(ctx.channel, SESSION, SEND_RESULTS)

@bot.command()
async def bosses(ctx, *, arg: str = ""):
    if _allowed(ctx):
        await handle_bosses(ctx.channel, SESSION, arg, SEND_RESULTS)

@bot.command()
async def testday(ctx):
    if ENABLE_TEST_COMMANDS and _allowed(ctx):
        await handle_test_day(ctx.channel, SESSION, SEND_RESULTS)

@bot.command()
async def realday(ctx):
    if ENABLE_TEST_COMMANDS and _allowed(ctx):
        await handle_real_day(ctx.channel, SESSION, SEND_RESULTS)


if __name__ == "__main__":
    bot.run(DISCORD_TOKEN)
