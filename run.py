#!/usr/bin/env python
"""
Development server for the crowdfunding site

Usage:
    SECRET_KEY=dev python run.py
"""

from app import create_app

if __name__ == '__main__':
    app = create_app()

    # Print registered routes for debugging
    print("\n=== Registered Routes ===")
    for rule in app.url_map.iter_rules():
        methods = ','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))
        print(f"{rule.rule:40s} {methods:10s} -> {rule.endpoint}")
    print("=" * 70)

    app.run(host='0.0.0.0', port=5001, debug=True)
