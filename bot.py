import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from submanager import __version__
from submanager.config.settings import ADMINS, BOT_TOKEN, DATABASE_PATH

# ============ Configuration ============

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(
    logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)

file_handler = logging.FileHandler("bot.log", encoding="utf-8")
file_handler.setLevel(logging.ERROR)
file_handler.setFormatter(
    logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)

logging.basicConfig(
    level=logging.INFO,
    handlers=[console_handler, file_handler]
)

logger = logging.getLogger(__name__)

# ============ Main Function ============
async def main():
    """Initialize and start the bot"""

    if not BOT_TOKEN:
        logger.critical("❌ BOT_TOKEN not found in .env file!")
        raise ValueError("❌ BOT_TOKEN not found in .env file!")

    if not ADMINS:
        logger.critical("❌ At least one ADMINS id is required in .env file!")
        raise ValueError("❌ ADMINS not found in .env file!")

    logger.info("✅ BOT_TOKEN loaded successfully")

    bot = Bot(
        token=BOT_TOKEN,
        default=DefaultBotProperties(parse_mode="HTML")
    )
    dp = Dispatcher()
    scheduler = AsyncIOScheduler()

    logger.info("=" * 60)
    logger.info(f"🚀 Starting SubManager Bot v{__version__}")
    logger.info("=" * 60)

    logger.info("🗄️  STEP 1: Initializing database...")

    try:
        from submanager.database.connection import DatabaseManager

        db_manager = DatabaseManager(DATABASE_PATH)
        await db_manager.init_db()

        tables = await db_manager.list_tables()
        if "records" not in tables:
            raise RuntimeError("Missing tables: {'records'}")

        logger.info(f"📋 Available tables: {', '.join(tables)}")
        logger.info("✅ Database initialized successfully!")
    except Exception as e:
        logger.critical(f"❌ Database initialization failed: {e}", exc_info=True)
        raise

    logger.info("📝 STEP 2: Registering handlers...")

    try:
        from submanager.handlers import (
            commands,
            reports,
            accounts,
            slots,
            clients,
            smart_add,
            settings
        )

        # Menu buttons and commands must be seen before any free-text step handler.
        for module in (commands, reports, accounts, slots, clients, smart_add, settings):
            dp.include_router(module.router)
            logger.info(f"  ✅ {module.__name__.rsplit('.', 1)[-1]} handler registered")

        logger.info("✅ All handlers registered successfully!")
    except Exception as e:
        logger.critical(f"❌ Handler registration failed: {e}", exc_info=True)
        raise

    logger.info("⏰ STEP 3: Setting up schedulers...")

    try:
        from submanager.schedulers.setup import setup_schedulers

        setup_schedulers(scheduler)
        scheduler.start()
        logger.info("✅ All schedulers started successfully!")

    except Exception as e:
        logger.error(f"⚠️  Scheduler setup failed: {e}", exc_info=True)
        logger.warning("⚠️  Bot will continue without schedulers")

    logger.info("=" * 60)
    logger.info("🤖 Bot is now running and listening for messages...")
    logger.info("=" * 60)

    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    except Exception as e:
        logger.critical(f"❌ Polling error: {e}", exc_info=True)
        raise
    finally:
        logger.info("🔄 Shutting down bot...")

        if scheduler.running:
            scheduler.shutdown(wait=False)
            logger.info("  ✅ Scheduler stopped")

        await bot.session.close()
        logger.info("  ✅ Bot session closed")

        logger.info("👋 Bot stopped successfully")

# ============ Entry Point ============
if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("\n👋 Bot stopped by user (Ctrl+C)")
    except Exception as e:
        logger.critical(f"❌ Fatal error: {e}", exc_info=True)
        sys.exit(1)
