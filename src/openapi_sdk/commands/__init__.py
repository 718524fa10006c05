"""Built-in CLI sub-commands for openapi-sdk.

* :mod:`~openapi_sdk.commands.generate` -- write the TypeScript client.
* :mod:`~openapi_sdk.commands.inspect` -- list the operations a document
  would generate, without writing anything.

Each module exports a plain callback function that
:mod:`openapi_sdk.app` registers on the root Typer application.
"""
