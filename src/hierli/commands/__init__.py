"""Built-in CLI sub-commands for hierli.

* :mod:`~hierli.commands.inspect` -- ``hierarchy``, ``verbs``, ``tree`` and
  ``run``, the commands that infer and display a spec's hierarchy.
* :mod:`~hierli.commands.config` -- view and modify global settings.

Single commands are plain callback functions registered directly on the root
app; multi-command groups (``config``) export a :class:`typer.Typer`
sub-application.
"""
