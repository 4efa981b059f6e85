#!/usr/bin/env python3
"""
Analyze tick CSVs produced by TickCsvLogger (UI) or the headless runner.

Features:
  - --session latest|<id> filters to a single run (so you never need to delete runs/)
  - Saves a timestamped cleaned CSV and a PNG trends plot under --outdir
  - Trends plot:
      (1) Population N, with births / eaten / starved per row
      (2) Avg radius & Avg speed
      (3) Avg power & Avg energy
Usage examples:
  python analyze_csv.py --csv runs/ui_ticks.csv --outdir reports --tag demo --session latest
"""
import argparse
import os
import sys
import time
import pandas as pd

# Use non-interactive backend for headless operation
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

NUMERIC = ("tick", "n", "births", "kills", "starved", "avg_energy", "avg_speed", "avg_radius",
           "avg_metabolism", "avg_digestion", "avg_power", "max_generation",
           "power_min", "power_q25", "power_median", "power_q75", "power_max")


# ------------------------- utilities -------------------------
def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)

def timestamp(tag: str | None = None) -> str:
    t = time.strftime("%Y%m%d_%H%M%S")
    return f"{t}__{tag}" if tag else t

def exists(path: str | None) -> bool:
    return bool(path and os.path.exists(path))


# ------------------------- loading ---------------------------
def load_csv(path: str) -> pd.DataFrame:
    if not exists(path):
        print(
            "\n[ERROR] Tick CSV not found.\n"
            f"  Expected: {path}\n"
            "Hints:\n"
            "  • Run the UI for at least one logging stride, or the headless runner with --csv.\n"
            "  • Confirm the logger path in blob_life/ui/app.py matches --csv.\n",
            file=sys.stderr
        )
        sys.exit(1)
    return pd.read_csv(path)


def latest_session_id(df: pd.DataFrame) -> str | None:
    """Return the last session_id in file order (used by --session latest)."""
    if "session_id" not in df.columns or len(df) == 0:
        return None
    s = df["session_id"].dropna()
    return str(s.iloc[-1]) if len(s) else None


def filter_session(df: pd.DataFrame, session: str) -> pd.DataFrame:
    if not session:
        return df.copy()
    if "session_id" not in df.columns:
        print("[WARN] --session provided but CSV has no session_id; ignoring.")
        return df.copy()
    sid = latest_session_id(df) if session == "latest" else session
    if not sid:
        print("[WARN] Could not resolve latest session_id; analyzing all data.")
        return df.copy()
    print(f"[OK] Filtering analysis to session_id={sid}")
    return df[df["session_id"].astype(str) == sid].copy()


def clean(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in NUMERIC:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    if "tick" not in df.columns:
        return df
    # If multiple sessions are present, average by tick
    if "session_id" in df.columns and df["session_id"].nunique() > 1:
        keep = [c for c in NUMERIC if c in df.columns and c != "tick"]
        df = df.groupby("tick", as_index=False)[keep].mean()
    return df.sort_values("tick").reset_index(drop=True)


# ------------------------- plotting --------------------------
def plot_trends(df: pd.DataFrame, outdir: str, tag: str | None) -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(3, 1, figsize=(10, 11), sharex=True)
    x = df["tick"] if "tick" in df.columns else df.index

    # -------- (1) population and events --------
    if "n" in df.columns:
        ax[0].plot(x, df["n"], label="N", color="black", linewidth=2.25)
    for col, label in (("births", "Born"), ("kills", "Eaten"), ("starved", "Starved")):
        if col in df.columns:
            ax[0].plot(x, df[col], linewidth=1.2, label=label)
    ax[0].set_ylabel("Count")
    ax[0].legend(loc="best", ncols=2)
    ax[0].grid(alpha=0.25)

    # -------- (2) body --------
    if "avg_radius" in df.columns:
        ax[1].plot(x, df["avg_radius"], label="Avg radius")
    if "avg_speed" in df.columns:
        ax[1].plot(x, df["avg_speed"], label="Avg speed")
    ax[1].set_ylabel("Trait value")
    ax[1].legend(loc="best")
    ax[1].grid(alpha=0.25)

    # -------- (3) power / energy --------
    if "avg_power" in df.columns:
        ax[2].plot(x, df["avg_power"], color="tab:red", label="Avg power")
    if {"power_q25", "power_q75"} <= set(df.columns):
        ax[2].fill_between(x, df["power_q25"], df["power_q75"], color="tab:red", alpha=0.15,
                           label="Power IQR")
    if "avg_energy" in df.columns:
        ax[2].plot(x, df["avg_energy"], color="tab:green", label="Avg energy")
    ax[2].set_xlabel("Tick")
    ax[2].legend(loc="best")
    ax[2].grid(alpha=0.25)

    fig.tight_layout()
    png = os.path.join(outdir, f"tick_trends_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def export_csv(df: pd.DataFrame, outdir: str, base: str, tag: str | None) -> str:
    ensure_dir(outdir)
    path = os.path.join(outdir, f"{base}_{timestamp(tag)}.csv")
    df.to_csv(path, index=False)
    print(f"[OK] Wrote {path}")
    return path


# ------------------------- main ------------------------------
def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", type=str, default="runs/ui_ticks.csv",
                    help="Path to the tick CSV written by the UI or headless runner")
    ap.add_argument("--outdir", type=str, default="reports",
                    help="Output directory for plots and exported CSVs")
    ap.add_argument("--tag", type=str, default="",
                    help="Optional label to append to filenames (e.g., 'fastsplit')")
    ap.add_argument("--session", type=str, default="",
                    help="Session ID to analyze; use 'latest' to pick the most recent session automatically.")
    args = ap.parse_args(argv)

    df = filter_session(load_csv(args.csv), args.session)
    print(f"[INFO] Rows after filter: {len(df)}")
    if len(df) == 0:
        print("[WARN] Nothing to analyze.")
        return

    df_clean = clean(df)
    export_csv(df_clean, args.outdir, base="tick_summary", tag=(args.tag or None))
    plot_trends(df_clean, args.outdir, tag=(args.tag or None))

    print(f"\nDone. Outputs are in: {args.outdir}")

if __name__ == "__main__":
    main()
