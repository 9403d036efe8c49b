from nicegui import ui
from typing import Dict, Callable

def create_layout(nav_funcs: Dict[str, Callable]) -> ui.column:
    """
    Builds the lab frame: Header, Sidebar, and Content Container.
    """
    # ---------------------------------------------------------
    # 1. HEADER
    # ---------------------------------------------------------
    with ui.header().classes('bg-slate-900 text-white shadow-lg items-center'):
        ui.button(on_click=lambda: left_drawer.toggle(), icon='menu').props('flat color=white')
        ui.label('KELLY CRASH LAB').classes('text-xl font-bold tracking-widest ml-2')
        ui.space()
        ui.label('The Mathematics of Capital Allocation').classes('text-xs text-emerald-400 font-mono')

    # ---------------------------------------------------------
    # 2. SIDEBAR (Navigation & Doctrine)
    # ---------------------------------------------------------
    with ui.left_drawer(value=True).classes('bg-slate-800 text-white') as left_drawer:
        with ui.column().classes('w-full p-4 gap-4'):

            ui.label('LABS').classes('text-slate-500 text-xs font-bold tracking-wider')
            with ui.column().classes('gap-2 w-full'):
                ui.button('KELLY LAB', icon='science', on_click=nav_funcs['kelly']).props('flat align=left').classes('w-full text-slate-200 hover:bg-slate-700')
                ui.button('CRASH LAB', icon='rocket_launch', on_click=nav_funcs['crash']).props('flat align=left').classes('w-full text-slate-200 hover:bg-slate-700')

            ui.separator().classes('bg-slate-700 my-2')

            ui.label('DOCTRINE').classes('text-slate-500 text-xs font-bold tracking-wider')

            with ui.card().classes('bg-slate-900 w-full p-3 border-l-4 border-emerald-500'):
                ui.label('"f* = (bp - q) / b"').classes('text-xs italic text-slate-300')
                ui.label('Negative f* means no bet at all.').classes('text-[10px] text-slate-500')

            with ui.card().classes('bg-slate-900 w-full p-3 border-l-4 border-red-500'):
                ui.label('"Over-betting is ruin"').classes('text-xs italic text-slate-300')
                ui.label('2x Kelly grows slower than 1x and risks everything.').classes('text-[10px] text-slate-500')

    # ---------------------------------------------------------
    # 3. MAIN CONTENT CONTAINER
    # ---------------------------------------------------------
    content = ui.column().classes('w-full items-center min-h-screen bg-slate-950')

    return content
