"""
Per-instrument tick bar engine.

Each tick is pushed into the instrument's window. Once the window is full a
cadence gate lets a full evaluation pass run every `eval_every_ticks` ticks:

    confluence -> EMA containment -> swing stop -> translate -> size -> submit

Every failure along the way ends the pass with a NoSignal; nothing retries
inside the engine, the next cadence tick simply evaluates again.
"""

from pathlib import Path
from typing import Optional, Union

from core.config import Settings, settings
from core.errors import EmptySliceError, InsufficientDataError, OutOfRangeError
from core.helpers import NoSignalReason
from core.logger import log_fill, log_rejection, log_signal, millis_to_datetime, utc_iso_str
from core.logging_utils import get_logger
from core.models import NoSignal, Signal, SignalDirection, Tick, TradeProposal
from core.tick_window import TickWindow
from core.trading_interfaces import ILotSizer, IOrderExecutor
from execution.sizing import LossStreak
from logic.bars import format_bar_duration, last_bar, last_n_bars
from logic.confluence import detect_confluence
from logic.ema_filter import current_ema, is_contained
from logic.swing import scan_swing_point
from logic.translator import SignalTranslator

logger = get_logger(__name__)

EvalResult = Union[Signal, NoSignal]


def evaluate(
    window: TickWindow,
    config: Settings = None,
    translator: Optional[SignalTranslator] = None,
) -> EvalResult:
    """Run one evaluation pass against the window's current contents."""
    config = config or settings
    translator = translator or SignalTranslator.from_settings(config)

    try:
        direction = detect_confluence(window, config.resolution_list)
        if direction is None:
            return NoSignal(NoSignalReason.NO_CONFLUENCE, "resolutions disagree or a bar is flat")

        ema_bars = last_n_bars(window, config.ema_bar_size, config.ema_bar_count)
        ema_value = current_ema(ema_bars, config.ema_period)
        signal_direction = SignalDirection.from_bar_direction(direction)
        if not is_contained(ema_bars[-1], ema_value, direction):
            return NoSignal(
                NoSignalReason.EMA_CONTAINMENT,
                f"last bar did not cross EMA {ema_value:.5f} {direction.value}",
                context={"ema": ema_value, "open": ema_bars[-1].open, "close": ema_bars[-1].close},
                direction=signal_direction,
            )

        if (config.swing_bar_size, config.swing_bar_count) == (config.ema_bar_size, config.ema_bar_count):
            swing_bars = ema_bars
        else:
            swing_bars = last_n_bars(window, config.swing_bar_size, config.swing_bar_count)

        extremum = scan_swing_point(swing_bars, signal_direction.is_long)
        if extremum is None:
            return NoSignal(
                NoSignalReason.NO_SWING_FOUND,
                f"no confirmed swing in {len(swing_bars)} bars",
                direction=signal_direction,
            )

        tick = window.last_tick
        entry = tick.ask if signal_direction.is_long else tick.bid
        return translator.translate(signal_direction, entry, extremum)

    except InsufficientDataError as e:
        return NoSignal(
            NoSignalReason.INSUFFICIENT_DATA,
            str(e),
            context={"required": e.required, "available": e.available},
        )
    except EmptySliceError as e:
        return NoSignal(NoSignalReason.EMPTY_SLICE, str(e))
    except OutOfRangeError as e:
        return NoSignal(
            NoSignalReason.OUT_OF_RANGE,
            str(e),
            context={"start": e.start, "end": e.end, "size": e.size},
        )


class TickBarEngine:
    """
    Owns one instrument's window, cadence counter, order counter and stats.

    Not thread-safe and not re-entrant: a pass (including the executor call it
    triggers) must return before the next tick is pushed.
    """

    def __init__(
        self,
        config: Settings = None,
        sizer: Optional[ILotSizer] = None,
        executor: Optional[IOrderExecutor] = None,
        loss_streak: Optional[LossStreak] = None,
        journal: bool = False,
    ):
        self.config = config or settings
        self.instrument = self.config.instrument
        self.window = TickWindow(self.config.window_capacity, self.instrument)
        self.translator = SignalTranslator.from_settings(self.config)
        self.sizer = sizer
        self.executor = executor
        self.loss_streak = loss_streak or LossStreak(limit=self.config.consecutive_loss_limit)
        self.journal = journal
        self._logs_dir = Path(self.config.logs_dir)

        self._ticks_since_eval = 0
        self._has_evaluated = False
        self._order_counter = 1
        self._evaluating = False

        self.evaluations = 0
        self.signals_generated = 0
        self.orders_submitted = 0
        self.rejections: dict[str, int] = {}
        self.last_result: Optional[EvalResult] = None

    def on_tick(self, tick: Tick) -> Optional[Union[EvalResult, TradeProposal]]:
        """Push a tick; run a pass when the cadence gate opens."""
        if self._evaluating:
            raise RuntimeError(f"[ENGINE] {self.instrument}: tick pushed during an evaluation pass")

        self.window.push(tick)
        self._ticks_since_eval += 1

        if not self._cadence_due():
            return None
        self._ticks_since_eval = 0
        self._has_evaluated = True
        return self.run_cycle()

    def _cadence_due(self) -> bool:
        if not self.window.is_full():
            return False
        if not self._has_evaluated:
            return True
        return self._ticks_since_eval >= self.config.eval_every_ticks

    def evaluate(self) -> EvalResult:
        return evaluate(self.window, self.config, self.translator)

    def run_cycle(self) -> Union[EvalResult, TradeProposal]:
        """One full pass: evaluate, then size and submit an accepted signal."""
        if self._evaluating:
            raise RuntimeError(f"[ENGINE] {self.instrument}: evaluation pass already running")

        self._evaluating = True
        try:
            result = self.evaluate()
            self.evaluations += 1
            self.last_result = result

            if isinstance(result, NoSignal):
                self._record_rejection(result)
                return result

            self.signals_generated += 1
            self._record_signal(result)

            if self.sizer is None:
                return result

            proposal = self.translator.propose(
                result,
                self.sizer,
                self.loss_streak.consecutive_losses,
                label=self._next_label(),
            )
            if self.executor is not None:
                self.executor.submit(
                    proposal.signal.direction,
                    proposal.signal.entry_price,
                    proposal.signal.buffered_stop_price,
                    proposal.signal.take_profit_price,
                    proposal.lot_size,
                    label=proposal.label,
                )
                self.orders_submitted += 1
                logger.info(
                    "[ENGINE] %s placed %s lot=%.3f [SL=%s, TP=%s]",
                    proposal.label,
                    proposal.signal.direction.value.upper(),
                    proposal.lot_size,
                    proposal.signal.buffered_stop_price,
                    proposal.signal.take_profit_price,
                )
            return proposal
        finally:
            self._evaluating = False

    def on_close(self, pnl_pips: float, label: str = ""):
        """Close notification from the order collaborator."""
        self.loss_streak.record_close(pnl_pips)
        logger.info(
            "[ENGINE] %s closed for %.1f pip %s (streak=%d)",
            label or self.instrument,
            pnl_pips,
            "LOSS" if pnl_pips < 0 else "PROFIT",
            self.loss_streak.consecutive_losses,
        )
        if self.journal:
            log_fill({
                "instrument": self.instrument,
                "label": label,
                "pnl_pips": pnl_pips,
                **self.loss_streak.summary(),
            }, logs_dir=self._logs_dir)

    def _next_label(self) -> str:
        label = f"{self.config.strategy_name}_{self.instrument.replace('/', '')}_{self._order_counter}"
        self._order_counter += 1
        return label

    def bar_durations(self) -> str:
        """Formation time of the newest bar at every resolution."""
        parts = []
        for size in self.config.resolution_list:
            try:
                parts.append(f"T{size}={format_bar_duration(last_bar(self.window, size))}")
            except InsufficientDataError:
                parts.append(f"T{size}=n/a")
        return "[" + ", ".join(parts) + "]"

    def _tick_ts(self):
        tick = self.window.last_tick
        return millis_to_datetime(tick.timestamp) if tick else None

    def _record_rejection(self, result: NoSignal):
        key = result.reason.value
        self.rejections[key] = self.rejections.get(key, 0) + 1

        if result.reason.is_logic_fault:
            logger.error("[ENGINE] %s logic fault (%s): %s", self.instrument, key, result.detail)
        else:
            logger.debug("[ENGINE] %s no signal (%s): %s", self.instrument, key, result.detail)

        if self.journal:
            ts = self._tick_ts()
            log_rejection({
                "ts": utc_iso_str(ts),
                "instrument": self.instrument,
                "reason": key,
                "detail": result.detail,
                "direction": result.direction.value if result.direction else None,
                **result.context,
            }, ts, self._logs_dir)

    def _record_signal(self, signal: Signal):
        durations = self.bar_durations()
        logger.info(
            "[ENGINE] %s %s @ %s [SL=%s, TP=%s] %s",
            self.instrument,
            signal.direction.value.upper(),
            signal.entry_price,
            signal.buffered_stop_price,
            signal.take_profit_price,
            durations,
        )
        if self.journal:
            ts = self._tick_ts()
            log_signal({
                "ts": utc_iso_str(ts),
                "instrument": self.instrument,
                "direction": signal.direction.value,
                "entry": signal.entry_price,
                "raw_stop": signal.raw_stop_price,
                "stop": signal.buffered_stop_price,
                "take_profit": signal.take_profit_price,
                "rr": round(signal.rr_ratio, 2),
                "durations": durations,
            }, ts, self._logs_dir)

    def get_stats(self) -> dict:
        return {
            "instrument": self.instrument,
            "ticks_buffered": len(self.window),
            "evaluations": self.evaluations,
            "signals_generated": self.signals_generated,
            "orders_submitted": self.orders_submitted,
            "rejections": dict(self.rejections),
            "loss_streak": self.loss_streak.summary(),
        }


class InstrumentRouter:
    """
    Routes ticks to one independent engine per instrument.

    Engines share nothing: each has its own window, counters and loss streak.
    Ticks for instruments without an engine are ignored.
    """

    def __init__(self, engines: dict[str, TickBarEngine]):
        self.engines = engines

    @classmethod
    def for_instruments(
        cls,
        pip_values: dict[str, float],
        config: Settings = None,
        sizer: Optional[ILotSizer] = None,
        executor: Optional[IOrderExecutor] = None,
        journal: bool = False,
    ) -> "InstrumentRouter":
        base = config or settings
        engines = {}
        for instrument, pip_value in pip_values.items():
            instrument_config = base.model_copy(update={"instrument": instrument, "pip_value": pip_value})
            engines[instrument] = TickBarEngine(
                instrument_config, sizer=sizer, executor=executor, journal=journal
            )
        logger.info("[ENGINE] Started %s using %s", base.strategy_name, ", ".join(engines))
        return cls(engines)

    def on_tick(self, instrument: str, tick: Tick) -> Optional[Union[EvalResult, TradeProposal]]:
        engine = self.engines.get(instrument)
        if engine is None:
            return None
        return engine.on_tick(tick)

    def on_close(self, instrument: str, pnl_pips: float, label: str = ""):
        engine = self.engines.get(instrument)
        if engine is not None:
            engine.on_close(pnl_pips, label)

    def get_stats(self) -> dict[str, dict]:
        return {instrument: engine.get_stats() for instrument, engine in self.engines.items()}
