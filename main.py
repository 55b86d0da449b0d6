import logging
import argparse

from database.database import build_engine, build_session_factory
from database.init_db import init_db
from web.backend.config import get_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_init_db(seed: bool):
    config = get_config()
    engine = build_engine(config.database.url)
    init_db(engine, session_factory=build_session_factory(engine), seed=seed)
    logger.info(f"Database initialised at {engine.url.render_as_string(hide_password=True)}")


def main():
    parser = argparse.ArgumentParser(description="ResumeRAG")
    parser.add_argument('--mode', type=str, choices=['serve', 'init-db'], default='serve',
                        help='serve (default): run the API server; init-db: create tables and exit')
    parser.add_argument('--seed', action='store_true',
                        help='Insert demo accounts and a sample job (init-db mode)')
    args = parser.parse_args()

    logger.info(f"ResumeRAG starting in {args.mode.upper()} mode...")

    if args.mode == 'init-db':
        run_init_db(seed=args.seed or get_config().seed.enabled)
        return

    from web.backend.app import main as serve
    serve()


if __name__ == "__main__":
    main()
