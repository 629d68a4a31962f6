"""Shell commands exposing frosts functionalities.

This module contains the shell commands that can be used to interact with frosts.

FSummary (file summary)
=======================

``frosts-summary`` prints summary statistics of a CSV or Parquet file::

    frosts-summary employees.csv

or aggregates it by one or more key columns::

    frosts-summary employees.csv -g Department -a Salary=mean,count

It can be tested against provided example data running it with the following command::

    frosts-summary examples/data/employees.csv -g City -g Department -a Salary=mean,count
"""
