#!/usr/bin/env python
import sys, pathlib
ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.scoring.score_batch import main

if __name__ == "__main__":
    main()
