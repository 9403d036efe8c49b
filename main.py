from nicegui import ui
import logging

# ==============================================================================
# MODULE IMPORTS
# ==============================================================================
from ui.layout import create_layout
from ui.lab_host import LabHost
from ui.kelly_lab import show_kelly_lab
from ui.crash_lab import show_crash_lab

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

# ==============================================================================
# 1. APP CONFIGURATION
# ==============================================================================
ui.dark_mode().enable()

# Tracks whichever lab is on screen and cancels its timers on switch
host = LabHost()

# --- SAFE LOADER DECORATOR ---
def safe_load(func):
    def wrapper():
        host.switch(func)
    return wrapper

# --- PAGE LOADERS ---

@safe_load
def load_kelly():
    return show_kelly_lab()

@safe_load
def load_crash():
    return show_crash_lab()

# ==============================================================================
# 2. LAYOUT & SIDEBAR
# ==============================================================================
host.content = create_layout({'kelly': load_kelly, 'crash': load_crash})
host.attach(ui.context.client)

# ==============================================================================
# 3. INITIAL STARTUP
# ==============================================================================
load_kelly()

if __name__ in {"__main__", "__mp_main__"}:
    ui.run(title='Kelly Crash Lab', port=8080, reload=True, favicon='🚀', show=True)
