from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

IGNORE_FILE_NAME = ".gitignore"
MANIFEST_FILE_NAME = "package.json"


class Strategy(StrEnum):
    """Available document generation strategies."""

    TEMPLATE = "template"
    MODEL = "model"


class HarmCategory(StrEnum):
    """Harm categories gated by the generative model's safety settings."""

    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmBlockThreshold(StrEnum):
    """Blocking thresholds understood by the generative model's safety settings."""

    BLOCK_NONE = "BLOCK_NONE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"


DEFAULT_MODEL_NAME = "gemini-1.5-flash"
DEFAULT_TEMPERATURE = 0.9
DEFAULT_TOP_K = 1
DEFAULT_TOP_P = 1.0
DEFAULT_MAX_OUTPUT_TOKENS = 2048
DEFAULT_SAFETY_THRESHOLD = HarmBlockThreshold.BLOCK_ONLY_HIGH
DEFAULT_HARM_CATEGORIES: tuple[HarmCategory, ...] = tuple(HarmCategory)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

README_TITLE = "# Título del Proyecto"
FILE_LIST_HEADING = "## Lista de archivos del proyecto"
DEPENDENCIES_HEADING = "## Dependencias"
DEV_DEPENDENCIES_HEADING = "## Dependencias de Desarrollo"

BOILERPLATE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Empezando", "Instrucciones para empezar con el proyecto"),
    ("Instalación", "Pasos para instalar el proyecto"),
    ("Uso", "Ejemplos de uso y capturas de pantalla"),
    ("Contribuyendo", "Instrucciones para contribuir al proyecto"),
    (
        "Licencia",
        "Este proyecto está bajo la Licencia (nombre de la licencia) - "
        "ver el archivo [LICENSE.md](LICENSE.md) para detalles",
    ),
)

DEFAULT_SEED_USER_MESSAGE = """\
Genera un archivo README.md en español para el siguiente proyecto.

Archivos del proyecto:
- package.json
- src/index.js
- test/index.test.js

package.json:
{
  "name": "saludos",
  "description": "Pequeña librería para generar saludos",
  "dependencies": {
    "chalk": "^5.3.0"
  },
  "devDependencies": {
    "jest": "^29.7.0"
  }
}"""

DEFAULT_SEED_MODEL_MESSAGE = """\
# saludos

Pequeña librería para generar saludos.

## Dependencias
- chalk: ^5.3.0

## Dependencias de Desarrollo
- jest: ^29.7.0

## Lista de archivos del proyecto
- package.json
- src/index.js
- test/index.test.js

## Empezando

Clona el repositorio y abre la carpeta del proyecto.

## Instalación

```bash
npm install
```

## Uso

```js
import { saludar } from "saludos";

console.log(saludar("Mundo"));
```

## Contribuyendo

Abre un issue o envía un pull request con tus cambios y sus pruebas (`npm test`).

## Licencia

Este proyecto está bajo la Licencia MIT - ver el archivo [LICENSE.md](LICENSE.md) para detalles"""


class Manifest(BaseModel):
    """Project metadata read from the manifest file.

    Only the fields used to describe the project are kept; anything else in the
    manifest is ignored. Dependency maps keep the key order of the source document.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str | None = Field(default=None, description="Project name; null and missing render empty.")
    description: str | None = Field(default=None, description="Project description.")
    dependencies: dict[str, str] | None = Field(
        default=None,
        description="Runtime dependencies, name -> version.",
    )
    dev_dependencies: dict[str, str] | None = Field(
        default=None,
        alias="devDependencies",
        description="Development dependencies, name -> version.",
    )
