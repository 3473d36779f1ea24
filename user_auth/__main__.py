# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit

from user_auth.app import create_app
from user_auth.infrastructure.container import Container


def main() -> None:
    container = Container()
    atexit.register(container.close)
    app = create_app(container)
    app.run(host="0.0.0.0", port=container.config.port)


if __name__ == "__main__":
    main()
