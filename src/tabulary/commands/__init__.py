"""Shell commands exposing Tabulary functionalities.

This module contains the shell commands that can be used to interact with Tabulary.

FTable (file table)
===================

``tabulary-ftable`` loads delimited files, combines and filters them::

    tabulary-ftable users.csv --merge orders.csv --on user_id --columns name,total

Multiple files with the same columns can be concatenated and deduplicated::

    tabulary-ftable sales-2023.csv sales-2024.csv --concat --dedupe -o sales.csv

"""
