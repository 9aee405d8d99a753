"""Development entrypoint.

Exposes `app` for platforms that look for it in `main.py`, without
shadowing the `lottery_app/` package.
"""

import os

from lottery_app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "8000")), debug=False)
