"""
Command Line Interface Package

Terminal front end for the savings ledger.

Command Structure:
- alkansya: Main entry point with utility commands (version, config, status)
- alkansya list/add/quick-add/edit/delete: Manage transactions
- alkansya empty/goal/theme: Vault transfer, goal and display preference
- alkansya export/import: CSV export and destructive CSV import

Destructive commands ask for confirmation; pass --yes to skip the prompt.
"""
