from nicegui import ui
import plotly.graph_objects as go

from engine.lab_params import (
    build_parameters, DEFAULT_WIN_PROBABILITY, DEFAULT_DECIMAL_ODDS, DEFAULT_TOTAL_ROUNDS,
    MIN_WIN_PROBABILITY, MAX_WIN_PROBABILITY, MIN_DECIMAL_ODDS, MAX_DECIMAL_ODDS, MAX_TOTAL_ROUNDS,
)
from engine.kelly_math import compute_metrics
from engine.round_simulator import simulate, summarize_trajectory, Outcome, STRATEGY_KEYS
from engine.playback import PlaybackController
from ui.timers import NiceGuiScheduler
from utils.advisory import AdvisoryChannel

STRATEGY_STYLE = {
    'full_kelly': ('Full Kelly (optimal)', '#34d399', 'solid'),
    'half_kelly': ('Half Kelly (safe)', '#60a5fa', 'solid'),
    'double_kelly': ('Double Kelly (aggressive)', '#f87171', 'dash'),
    'fixed_bet': ('Fixed 5% of start', '#94a3b8', 'dot'),
}


def build_wealth_figure(visible, total_rounds):
    fig = go.Figure()
    rounds = [s.round for s in visible]
    for key in STRATEGY_KEYS:
        name, color, dash = STRATEGY_STYLE[key]
        fig.add_trace(go.Scatter(x=rounds, y=[s.wealth(key) for s in visible], mode='lines', name=name, line=dict(color=color, width=2, dash=dash)))
    fig.update_layout(
        title='Wealth Path (Shared Outcomes)', paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
        font=dict(color='#94a3b8'), margin=dict(l=20, r=20, t=40, b=20),
        xaxis=dict(title='Round', range=[0, max(1, total_rounds)], gridcolor='#334155'),
        yaxis=dict(title='Wealth ($)', type='log', gridcolor='#334155'),
        showlegend=True, legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


def show_kelly_lab():
    page = ui.column().classes('w-full max-w-5xl mx-auto gap-6 p-4')
    scheduler = NiceGuiScheduler(page)
    controller = PlaybackController([], scheduler)
    advisor = AdvisoryChannel()

    def current_params():
        return build_parameters(slider_p.value, slider_odds.value, slider_rounds.value)

    def regenerate():
        params = current_params()
        controller.load(simulate(params))
        advisor.invalidate()
        label_advice.set_text('Ask for an analysis of these parameters.')

    def refresh_metrics():
        params = current_params()
        m = compute_metrics(params.win_probability, params.decimal_odds)
        f_col = 'text-emerald-400' if m.optimal_fraction > 0 else 'text-red-400'
        lbl_fstar.set_text(f"{m.optimal_fraction * 100:.2f}%" if m.optimal_fraction > 0 else f"DO NOT BET ({m.optimal_fraction * 100:.2f}%)")
        lbl_fstar.classes(replace=f'text-3xl font-black {f_col}')
        lbl_edge.set_text(f"{m.edge:+.4f} per $1")
        lbl_b.set_text(f"{m.net_odds:.2f} : 1")
        lbl_formula.set_text(f"f* = ({params.win_probability:.2f} × {params.decimal_odds:.2f} - 1) / {m.net_odds:.2f}")

    def refresh_playback():
        visible = controller.visible_prefix()
        total = max(0, controller.last_index)
        lbl_round.set_text(f"{controller.current_index} / {total}")
        btn_play.set_text('PAUSE' if controller.is_playing else 'PLAY')
        plot.update_figure(build_wealth_figure(visible, total))
        render_narrative()
        render_scoreboard(visible)

    def render_narrative():
        snap = controller.current_snapshot()
        narrative_container.clear()
        if snap is None or snap.outcome is None:
            return
        won = snap.outcome == Outcome.WIN
        with narrative_container:
            with ui.card().classes(f'w-full bg-slate-800/50 border-l-4 {"border-emerald-500" if won else "border-red-500"}'):
                with ui.row().classes('w-full items-center justify-between'):
                    ui.label(f"Round {snap.round} result:").classes('font-bold text-slate-200')
                    ui.label('WIN' if won else 'LOSS').classes(f'font-black px-2 rounded text-xs {"bg-emerald-500/20 text-emerald-400" if won else "bg-red-500/20 text-red-400"}')
                with ui.grid(columns=3).classes('w-full gap-4'):
                    with ui.column().classes('gap-0'):
                        ui.label('Full Kelly').classes('text-[10px] text-slate-500 uppercase')
                        ui.label(f"${snap.full_kelly:,.0f}").classes('font-mono text-white')
                    with ui.column().classes('gap-0'):
                        ui.label('Double Kelly').classes('text-[10px] text-slate-500 uppercase')
                        ui.label(f"${snap.double_kelly:,.0f}").classes(f'font-mono {"text-red-500" if snap.double_kelly < 10 else "text-slate-300"}')
                    ui.label('Compounding: wealth + stake × b' if won else 'Drawdown: wealth - stake').classes('text-xs text-slate-400 italic')

    def render_scoreboard(visible):
        scoreboard_container.clear()
        stats = summarize_trajectory(visible)
        with scoreboard_container:
            with ui.grid(columns=4).classes('w-full gap-4'):
                for key in STRATEGY_KEYS:
                    s = stats.get(key)
                    if s is None: continue
                    name, color, _ = STRATEGY_STYLE[key]
                    with ui.column().classes('items-center'):
                        ui.label(name).classes('text-[10px] text-slate-500 uppercase')
                        ui.label(f"${s.final_wealth:,.0f}").classes('text-xl font-bold').style(f'color: {color}')
                        ui.label('RUINED' if s.ruined else f"Max DD {s.max_drawdown * 100:.0f}%").classes(f'text-[10px] {"text-red-500 font-bold" if s.ruined else "text-slate-500"}')

    async def ask_advisor():
        params = current_params()
        m = compute_metrics(params.win_probability, params.decimal_odds)
        btn_advice.disable(); label_advice.set_text('Thinking...')
        try:
            text = await advisor.request(params.win_probability, params.decimal_odds, m.optimal_fraction)
            if text is not None:
                label_advice.set_text(text)
        finally:
            btn_advice.enable()

    def on_param_change():
        refresh_metrics()
        regenerate()

    # --- MAIN UI ---
    with page:
        ui.label('KELLY LAB: STRATEGY RACE').classes('text-2xl font-light text-slate-300')

        with ui.grid(columns=2).classes('w-full gap-6'):
            with ui.card().classes('w-full bg-slate-900 p-6 gap-4'):
                ui.label('SIMULATION').classes('font-bold text-white')

                with ui.row().classes('w-full justify-between'):
                    ui.label('Win Rate (p)').classes('text-xs text-slate-400'); lbl_p = ui.label()
                slider_p = ui.slider(min=MIN_WIN_PROBABILITY, max=MAX_WIN_PROBABILITY, step=0.01, value=DEFAULT_WIN_PROBABILITY, on_change=on_param_change).props('color=green')
                lbl_p.bind_text_from(slider_p, 'value', lambda v: f'{v * 100:.0f}%')

                with ui.row().classes('w-full justify-between'):
                    ui.label('Decimal Odds (b + 1)').classes('text-xs text-slate-400'); lbl_odds = ui.label()
                slider_odds = ui.slider(min=MIN_DECIMAL_ODDS, max=MAX_DECIMAL_ODDS, step=0.05, value=DEFAULT_DECIMAL_ODDS, on_change=on_param_change).props('color=amber')
                lbl_odds.bind_text_from(slider_odds, 'value', lambda v: f'{v:.2f}x')

                with ui.row().classes('w-full justify-between'):
                    ui.label('Rounds').classes('text-xs text-slate-400'); lbl_rounds = ui.label()
                slider_rounds = ui.slider(min=10, max=MAX_TOTAL_ROUNDS, step=10, value=DEFAULT_TOTAL_ROUNDS, on_change=on_param_change).props('color=blue')
                lbl_rounds.bind_text_from(slider_rounds, 'value', lambda v: f'{v}')

                ui.button('NEW RANDOM PATH', icon='casino', on_click=regenerate).props('outline color=grey').classes('w-full')

            with ui.card().classes('w-full bg-slate-800 p-6 gap-2'):
                ui.label('THE MATH').classes('font-bold text-indigo-300')
                lbl_formula = ui.label().classes('font-mono text-sm text-slate-400')
                lbl_fstar = ui.label()
                with ui.row().classes('w-full justify-between'):
                    ui.label('Edge').classes('text-xs text-slate-500'); lbl_edge = ui.label().classes('font-mono text-emerald-300')
                with ui.row().classes('w-full justify-between'):
                    ui.label('Net Odds (b)').classes('text-xs text-slate-500'); lbl_b = ui.label().classes('font-mono text-amber-400')

        # Playback Controls
        with ui.card().classes('w-full bg-slate-900 p-4'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.row().classes('items-center gap-4'):
                    ui.button(icon='restart_alt', on_click=controller.reset).props('flat round color=grey').tooltip('Reset')
                    btn_play = ui.button('PLAY', on_click=controller.toggle).props('color=green').classes('min-w-[100px] font-bold')
                    ui.button(icon='chevron_right', on_click=controller.step_forward).props('flat round color=grey').tooltip('Step')
                with ui.column().classes('items-end gap-0'):
                    ui.label('CURRENT ROUND').classes('text-[10px] text-slate-500 tracking-widest')
                    lbl_round = ui.label().classes('font-mono text-2xl text-white')

        scoreboard_container = ui.column().classes('w-full')
        with ui.card().classes('w-full bg-slate-900 p-4'):
            plot = ui.plotly(go.Figure()).classes('w-full h-96')
        narrative_container = ui.column().classes('w-full')

        with ui.card().classes('w-full bg-slate-900 p-6 border-t-4 border-purple-500'):
            ui.label('ADVISOR').classes('font-bold text-purple-300')
            label_advice = ui.label('Ask for an analysis of these parameters.').classes('text-sm text-slate-300')
            btn_advice = ui.button('ASK THE ADVISOR', icon='auto_awesome', on_click=ask_advisor).props('outline color=purple')

    controller.on_change = refresh_playback
    on_param_change()
    return controller.teardown
