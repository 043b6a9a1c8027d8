"""Shared configuration, constants, errors and logging for toolfetch."""
