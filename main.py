#!/usr/bin/env python3
"""
Route53 Records Manager - Main Entry Point

This is the main entry point for the Route53 Records Manager.
It can be run directly or imported as a module.
"""

from route53_records_manager.cli.main import main

if __name__ == "__main__":
    main()
