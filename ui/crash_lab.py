from nicegui import ui

from engine.crash_engine import CrashEngine, CrashPhase
from engine.lab_params import (
    clamp_bet_amount, clamp_target_multiplier, DEFAULT_BANKROLL,
    DEFAULT_BET_AMOUNT, DEFAULT_TARGET_MULTIPLIER, MIN_TARGET_MULTIPLIER,
)
from ui.timers import NiceGuiScheduler

PHASE_STYLE = {
    CrashPhase.IDLE: ('text-white', ''),
    CrashPhase.RUNNING: ('text-white', 'TO THE MOON!'),
    CrashPhase.CRASHED: ('text-red-500', 'RUG PULL!'),
    CrashPhase.CASHED: ('text-emerald-400', 'SECURED!'),
}


def analysis_row(caption: str, color: str) -> ui.label:
    with ui.row().classes('w-full justify-between border-b border-slate-700 py-1'):
        ui.label(caption).classes('text-slate-400 text-sm')
        return ui.label().classes(f'font-mono {color}')


def show_crash_lab():
    page = ui.column().classes('w-full max-w-5xl mx-auto gap-6 p-4')
    engine = CrashEngine(NiceGuiScheduler(page), bankroll=DEFAULT_BANKROLL,
                         bet_amount=DEFAULT_BET_AMOUNT, target_multiplier=DEFAULT_TARGET_MULTIPLIER)

    def refresh():
        s = engine.state
        color, status = PHASE_STYLE[s.phase]
        lbl_mult.set_text(f"{s.current_multiplier:.2f}x")
        lbl_mult.classes(replace=f'text-7xl font-mono font-black {color}')
        lbl_status.set_text(status)
        lbl_bankroll.set_text(f"${s.bankroll:,.2f}")
        bar_bankroll.set_value(min(1.0, s.bankroll / DEFAULT_BANKROLL))
        btn_start.set_text('HOLDING...' if s.phase == CrashPhase.RUNNING else 'BUY IN')
        if engine.can_start(): btn_start.enable()
        else: btn_start.disable()
        if s.phase != CrashPhase.RUNNING:
            refresh_analysis()
            render_history()

    def refresh_analysis():
        s = engine.state
        a = engine.analysis()
        lbl_target.set_text(f"{s.target_multiplier:.2f}x")
        lbl_prob.set_text(f"{a.implied_win_probability * 100:.2f}%")
        lbl_net.set_text(f"{a.net_odds:.2f} : 1")
        f_col = 'text-emerald-400' if a.optimal_fraction > 0 else 'text-red-400'
        lbl_kelly.set_text(f"{a.optimal_fraction * 100:.2f}% (${a.suggested_bet:,.0f})")
        lbl_kelly.classes(replace=f'font-mono font-bold {f_col}')
        lbl_verdict.set_text(
            "Don't bet. With a house edge the risk outweighs the reward unless you know something the house doesn't."
            if a.optimal_fraction <= 0 else "If you truly have an edge, this is the theoretical maximum stake.")
        share = (s.bet_amount / s.bankroll * 100) if s.bankroll > 0 else float('inf')
        lbl_share.set_text(f"Current bet: {share:.1f}% of bankroll")

    def render_history():
        history_container.clear()
        with history_container:
            if not engine.history:
                ui.label('No rounds played yet').classes('text-center text-slate-600 italic text-xs w-full')
                return
            for h in engine.history:
                won = h.result == CrashPhase.CASHED
                with ui.row().classes('w-full items-center justify-between p-2 rounded bg-slate-800/50 text-sm'):
                    with ui.row().classes('items-center gap-2'):
                        ui.icon('circle', color='green' if won else 'red').classes('text-[8px]')
                        ui.label(f"{h.crash_point:.2f}x").classes('font-mono text-slate-300')
                    ui.label(f"{h.profit:+.0f}").classes(f'font-mono {"text-emerald-400" if h.profit > 0 else "text-red-400"}')

    def on_target_change(e):
        engine.set_target_multiplier(clamp_target_multiplier(e.value))

    def on_bet_change(e):
        engine.set_bet_amount(clamp_bet_amount(e.value))

    def start_round():
        if not engine.start():
            ui.notify('Insufficient bankroll for this bet', type='warning')

    # --- MAIN UI ---
    with page:
        ui.label('CRASH LAB: MEME ROCKET').classes('text-2xl font-light text-slate-300')
        with ui.grid(columns=2).classes('w-full gap-6'):
            with ui.column().classes('w-full gap-4'):
                with ui.card().classes('w-full bg-slate-900 min-h-[300px] items-center justify-center'):
                    lbl_mult = ui.label()
                    lbl_status = ui.label().classes('text-yellow-400 font-bold h-8')

                with ui.grid(columns=2).classes('w-full gap-4'):
                    ui.number('Target (auto cash-out)', value=DEFAULT_TARGET_MULTIPLIER, min=MIN_TARGET_MULTIPLIER, step=0.1, format='%.2f', suffix='x', on_change=on_target_change).props('dark outlined')
                    ui.number('Bet Amount', value=DEFAULT_BET_AMOUNT, min=1, step=10, prefix='$', on_change=on_bet_change).props('dark outlined')

                btn_start = ui.button('BUY IN', on_click=start_round).props('color=amber text-color=black size=lg').classes('w-full font-bold tracking-widest')

            with ui.column().classes('w-full gap-4'):
                with ui.card().classes('w-full bg-slate-800 p-6'):
                    with ui.row().classes('w-full items-end justify-between'):
                        ui.label('WALLET').classes('text-xl font-bold text-white')
                        lbl_bankroll = ui.label().classes('text-2xl font-mono text-emerald-400')
                    bar_bankroll = ui.linear_progress(show_value=False).props('color=green')

                with ui.card().classes('w-full bg-slate-900 p-6 border border-indigo-500/30 gap-2'):
                    ui.label('LIVE KELLY ANALYSIS').classes('text-lg font-bold text-indigo-300')
                    lbl_target = analysis_row('Target', 'text-white')
                    lbl_prob = analysis_row('Implied win rate', 'text-blue-400')
                    lbl_net = analysis_row('Net odds (b)', 'text-amber-400')
                    with ui.row().classes('w-full justify-between mt-2'):
                        ui.label('Optimal Kelly bet:').classes('text-slate-300 font-bold')
                        lbl_kelly = ui.label()
                    lbl_verdict = ui.label().classes('text-xs text-slate-500')
                    lbl_share = ui.label().classes('text-xs text-slate-500 italic')

                with ui.card().classes('w-full bg-slate-900 p-4'):
                    ui.label('RECENT ROUNDS').classes('text-xs font-bold text-slate-500 uppercase')
                    history_container = ui.column().classes('w-full gap-2')

    engine.on_change = refresh
    refresh()
    return engine.teardown
