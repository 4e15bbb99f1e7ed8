# src/leavecompass/charts.py
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

COLOR_USED = '#FFADAD'
COLOR_REMAINING = '#A0FFA0'
BAR_COLORS = ['#A0C4FF', '#FFD97D', '#BDB2FF', '#A0FFA0']


def _placeholder(filename: str, subtitle: str = None):
    fig, ax = plt.subplots()
    ax.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=14)
    ax.axis("off")
    if subtitle:
        fig.text(0.5, 0.02, subtitle, ha="center", va="bottom", fontsize=16, fontweight='bold')
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)


def create_usage_chart(summary: dict, filename: str, subtitle: str = None):
    """
    Tortendiagramm verbraucht/verbleibend als PNG.
    :param summary: Ergebnis von statistics.summarize_usage.
    :param filename: Pfad zur Ausgabedatei.
    :param subtitle: (Optional) Text unter dem Diagramm.
    """
    values = [max(summary.get('total_used', 0), 0), max(summary.get('remaining', 0), 0)]
    if sum(values) == 0:
        _placeholder(filename, subtitle)
        return
    fig, ax = plt.subplots()
    try:
        ax.pie(values, labels=["Used", "Remaining"], autopct="%1.1f%%",
               colors=[COLOR_USED, COLOR_REMAINING])
        ax.axis("equal")
        if subtitle:
            fig.text(0.5, 0.02, subtitle, ha="center", va="bottom", fontsize=16, fontweight='bold')
        fig.savefig(filename, bbox_inches="tight")
    except OSError as e:
        logging.error(f"Diagramm konnte nicht gespeichert werden: {e}")
        raise
    finally:
        plt.close(fig)


def create_balance_bar_chart(summary: dict, filename: str):
    """Balken: gebucht, Weihnachten, Übertrag, Rest."""
    labels = ["Booked", "Christmas", "Carry forward", "Remaining"]
    values = [summary.get(k, 0) for k in ('booked', 'xmas', 'carry_forward', 'remaining')]
    if not any(values):
        _placeholder(filename)
        return
    fig, ax = plt.subplots()
    try:
        ax.bar(labels, values, color=BAR_COLORS)
        ax.set_ylabel("Days")
        ax.spines[['top', 'right']].set_visible(False)
        fig.savefig(filename, bbox_inches="tight")
    except OSError as e:
        logging.error(f"Diagramm konnte nicht gespeichert werden: {e}")
        raise
    finally:
        plt.close(fig)
