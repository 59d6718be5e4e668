import logging
import datetime
from pathlib import Path

# Paths
LOGS_DIR = Path("logs")
ARTIFACTS_DIR = LOGS_DIR / "debug_artifacts"

ROOT_LOGGER_NAME = "NaukriBot"

def setup_logger(name=ROOT_LOGGER_NAME, logs_dir=None):
    """Sets up a centralized logger for the application."""
    logs_dir = Path(logs_dir) if logs_dir else LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if not logger.handlers:
        # File Handler
        fh = logging.FileHandler(logs_dir / "app.log", encoding="utf-8")
        fh.setLevel(logging.DEBUG)

        # Console Handler
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)

        # Formatter
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

    return logger

def get_logger(name):
    """Child logger under the application root, e.g. NaukriBot.Executor."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

logger = get_logger("Core")

async def save_debug_artifact(driver, name_prefix="error", artifacts_dir=None):
    """Saves a screenshot and HTML dump for debugging automation failures."""
    artifacts_dir = Path(artifacts_dir) if artifacts_dir else ARTIFACTS_DIR
    artifacts_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    base_name = f"{name_prefix}_{timestamp}"

    # Save Screenshot
    try:
        screenshot_path = artifacts_dir / f"{base_name}.png"
        await driver.screenshot(str(screenshot_path))
        logger.debug(f"Saved screenshot to {screenshot_path}")
    except Exception as e:
        logger.error(f"Failed to save screenshot: {e}")

    # Save HTML
    try:
        html_path = artifacts_dir / f"{base_name}.html"
        html = await driver.content()
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(html)
        logger.debug(f"Saved HTML dump to {html_path}")
    except Exception as e:
        logger.error(f"Failed to save HTML dump: {e}")

    return base_name
