"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import os
import threading

from calendar_window import CalendarWindow
from tray_icon import create_tray


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("MINI_CALENDAR_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cal_win = CalendarWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.hide()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    tray = create_tray(on_show, on_exit, on_settings=on_settings)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
