#!/usr/bin/env python3
"""
Timer Sample Statistics — Summary Script
========================================
Thin entry-point. All logic lives in src.reporter.

Modes:
  Files:   python3 summarize_samples.py latencies.txt [-q 0.9 -q 0.99]
  Stdin:   cat samples.txt | python3 summarize_samples.py - --json
  Redis:   python3 summarize_samples.py --redis-key api.request --flush
  Sets:    python3 summarize_samples.py user_ids.txt --set
"""

from src.reporter.cli import main

if __name__ == "__main__":
    main()
