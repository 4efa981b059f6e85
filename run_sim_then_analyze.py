#!/usr/bin/env python3
"""
One-shot runner:
  1) Launch UI (blocks until you close it)
  2) Analyze only the latest session from the UI tick log

Usage:
  python run_sim_then_analyze.py --outdir reports --tag demo
"""
import argparse
import subprocess
import sys
import os
import csv

def get_latest_session_id(path: str) -> str | None:
    if not os.path.exists(path):
        return None
    last_sid = None
    with open(path, newline="") as f:
        for row in csv.DictReader(f):
            sid = row.get("session_id")
            if sid:
                last_sid = sid
    return last_sid

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", default="runs/ui_ticks.csv")
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--tag", default="")
    ap.add_argument("--seed", type=int, default=42)
    args = ap.parse_args()

    # 1) Run the UI
    ui_cmd = [sys.executable, "-m", "blob_life.main", "--ui", "--seed", str(args.seed)]
    print("[launcher] Starting UI:", " ".join(ui_cmd))
    ret = subprocess.call(ui_cmd)
    if ret != 0:
        print(f"[launcher] UI exited with code {ret}", file=sys.stderr)

    # 2) Resolve latest session_id
    sid = get_latest_session_id(args.csv)
    if not sid:
        print("[launcher] No session_id found in tick CSV; maybe no row was logged yet?")
        sys.exit(0)

    # 3) Analyze only this session
    ana_cmd = [
        sys.executable, "analyze_csv.py",
        "--csv", args.csv,
        "--outdir", args.outdir,
        "--tag", args.tag,
        "--session", sid
    ]
    print("[launcher] Analyzing session:", sid)
    print("[launcher] Running:", " ".join(ana_cmd))
    sys.exit(subprocess.call(ana_cmd))

if __name__ == "__main__":
    main()
