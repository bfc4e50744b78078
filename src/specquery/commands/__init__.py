"""Built-in CLI sub-commands for specquery.

* :mod:`~specquery.commands.generate` -- write the TypeScript client, query
  keys, invalidation helpers, and hooks for an OpenAPI spec.
* :mod:`~specquery.commands.inspect` -- list the operations a spec yields and
  preview the request a hook would send.

``generate`` is a plain callback registered directly on the root app;
``inspect`` is a multi-command :class:`typer.Typer` sub-application.
"""
