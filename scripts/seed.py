from apexgrid.core.logging import configure_logging
from apexgrid.db.session import engine, Session, init_db
from apexgrid.db.seed import seed_all


def run_seed():
    configure_logging()
    init_db()
    with Session(engine) as session:
        seed_all(session=session)


if __name__ == "__main__":
    run_seed()
