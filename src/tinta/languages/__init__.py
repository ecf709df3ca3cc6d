"""Built-in language definitions.

A small set of grammars that ship with Tinta, registered by
create_default_registry() in dependency order:

- clike: base grammar for C-family languages
- pascaligo: PascaLIGO (Tezos smart contracts)
- qsharp (alias ``qs``): Q#, extends clike

"""

from tinta.languages.clike import LANGUAGE as CLIKE
from tinta.languages.pascaligo import LANGUAGE as PASCALIGO
from tinta.languages.qsharp import LANGUAGE as QSHARP
from tinta.registry import LanguageDefinition

# Registration order: requirements first
BUILTIN_LANGUAGES: tuple[LanguageDefinition, ...] = (CLIKE, PASCALIGO, QSHARP)

__all__ = ["BUILTIN_LANGUAGES", "CLIKE", "PASCALIGO", "QSHARP"]
