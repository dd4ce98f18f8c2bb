"""Run Alembic migrations programmatically."""
import subprocess
import sys

USAGE = "Usage: python scripts/migrate.py [upgrade|downgrade [rev]|revision [message]|history|current]"


def main() -> int:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "upgrade"
    if cmd == "upgrade":
        subprocess.run(["alembic", "upgrade", "head"], check=True)
    elif cmd == "downgrade":
        rev = sys.argv[2] if len(sys.argv) > 2 else "-1"
        subprocess.run(["alembic", "downgrade", rev], check=True)
    elif cmd == "revision":
        msg = sys.argv[2] if len(sys.argv) > 2 else "auto migration"
        subprocess.run(["alembic", "revision", "--autogenerate", "-m", msg], check=True)
    elif cmd == "history":
        subprocess.run(["alembic", "history", "--verbose"], check=True)
    elif cmd == "current":
        subprocess.run(["alembic", "current"], check=True)
    else:
        print(USAGE)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
