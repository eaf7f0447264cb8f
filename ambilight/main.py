"""Точка входа в приложение."""
import logging
import sys

from ambilight.app import AmbilightApp


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно.

    Необязательный аргумент командной строки: путь к BMP, который откроется сразу.
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = AmbilightApp()
    if len(sys.argv) > 1:
        app.after(100, app.open_file, sys.argv[1])
    app.mainloop()


if __name__ == "__main__":
    main()
