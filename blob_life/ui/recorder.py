# blob_life/ui/recorder.py
from __future__ import annotations
import os, time
from typing import Optional
import numpy as np

class Recorder:
    """
    Capture snapshots every `stride_ticks` for offline playback (NPZ).
    Stores per frame: pos, radius, color, energy, ids, followed id and tick.
    """
    def __init__(self, enabled=False, stride_ticks=2, world_width=800.0, world_height=800.0,
                 out_dir="recordings"):
        self.enabled = enabled
        self.stride_ticks = max(1, int(stride_ticks))
        self.world_width = float(world_width)
        self.world_height = float(world_height)
        self.out_dir = out_dir
        self._calls = 0
        self.pos_list = []
        self.radius_list = []
        self.color_list = []
        self.energy_list = []
        self.id_list = []
        self.followed_list = []
        self.tick_list = []
        self.maxN = 0

    def __len__(self):
        return len(self.pos_list)

    def toggle(self): self.enabled = not self.enabled; print(f"[Recorder] {'ON' if self.enabled else 'OFF'}")
    def clear(self):
        self._calls = 0
        self.pos_list.clear(); self.radius_list.clear(); self.color_list.clear()
        self.energy_list.clear(); self.id_list.clear(); self.followed_list.clear(); self.tick_list.clear()
        self.maxN = 0
        print("[Recorder] cleared")

    def maybe_capture(self, live):
        if not self.enabled: return
        self._calls += 1
        if ((self._calls - 1) % self.stride_ticks) != 0: return

        pop = live.world.creatures
        N = len(pop); self.maxN = max(self.maxN, N)
        pos = np.zeros((N,2), np.float32)
        rad = np.zeros((N,), np.float32)
        col = np.zeros((N,3), np.uint8)
        en  = np.zeros((N,), np.float32)
        ids = np.zeros((N,), np.int64)

        for i, c in enumerate(pop):
            pos[i] = (c.x, c.y)
            rad[i] = c.radius
            col[i] = c.color
            en[i]  = c.energy
            ids[i] = c.id

        self.pos_list.append(pos); self.radius_list.append(rad); self.color_list.append(col)
        self.energy_list.append(en); self.id_list.append(ids)
        f = live.followed()
        self.followed_list.append(f.id if f is not None else -1)
        self.tick_list.append(live.tick)

    def save_npz(self, out_path: Optional[str]=None):
        if not self.pos_list:
            print("[Recorder] nothing to save"); return None

        T = len(self.pos_list); maxN = self.maxN
        pos  = np.full((T, maxN, 2), np.nan, np.float32)
        rad  = np.full((T, maxN), np.nan, np.float32)
        col  = np.zeros((T, maxN, 3), np.uint8)
        en   = np.full((T, maxN), np.nan, np.float32)
        ids  = np.full((T, maxN), -1, np.int64)
        count = np.zeros((T,), np.int32)

        for t in range(T):
            N = self.pos_list[t].shape[0]
            count[t] = N
            pos[t, :N] = self.pos_list[t]
            rad[t, :N] = self.radius_list[t]
            col[t, :N] = self.color_list[t]
            en[t, :N]  = self.energy_list[t]
            ids[t, :N] = self.id_list[t]

        if out_path is None:
            os.makedirs(self.out_dir, exist_ok=True)
            stamp = time.strftime("%Y%m%d_%H%M%S")
            out_path = os.path.join(self.out_dir, f"blob_run_{stamp}.npz")

        np.savez_compressed(
            out_path,
            world_width=np.float32(self.world_width),
            world_height=np.float32(self.world_height),
            stride_ticks=np.int32(self.stride_ticks),
            pos=pos, radius=rad, color=col, energy=en, ids=ids, count=count,
            followed=np.array(self.followed_list, np.int64),
            tick=np.array(self.tick_list, np.int64),
        )
        print(f"[Recorder] saved: {out_path} (T={T}, maxN={maxN})")
        return out_path
