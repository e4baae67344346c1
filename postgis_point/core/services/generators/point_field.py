"""
Point field snippets — Java and Liquibase text for one point field.

Every snippet is wrapped in the plugin's own marker pair so that the
regeneration step can remove it again without touching anything else.
Snippets carry no leading indentation; the splicer indents them to the
needle they are inserted at.
"""

from __future__ import annotations

from postgis_point.core.models.field import FieldDefinition, upper_first
from postgis_point.core.services.splicer import MarkerRegion

SRID = 4326
GEOMETRY_TYPE = f"geometry(Point,{SRID})"

# ── Regions owned by the plugin ────────────────────────────────

FIELD_REGION = MarkerRegion.named("jhipster-needle-postgis-field")
FUNCTIONS_REGION = MarkerRegion.named("jhipster-needle-postgis-functions")
COLUMN_REGION = MarkerRegion.named("jhipster-needle-postgis-fields")

# ── Imports owned by the plugin ────────────────────────────────

IMPORT_ANCHOR = "import java.io.Serializable;"

OWNED_IMPORTS: tuple[str, ...] = (
    "import com.vividsolutions.jts.geom.GeometryFactory;",
    "import com.vividsolutions.jts.geom.Point;",
    "import com.vividsolutions.jts.io.ParseException;",
    "import com.vividsolutions.jts.io.WKTReader;",
)


def render_imports() -> str:
    return "\n".join(OWNED_IMPORTS)


def render_field_declaration(field: FieldDefinition) -> str:
    """JPA attribute for the point column."""
    nullable = ", nullable = false" if field.required else ""
    return "\n".join([
        f"// {FIELD_REGION.start} - don't remove",
        f'@Column(name = "{field.column_name}", columnDefinition = "{GEOMETRY_TYPE}"{nullable})',
        f"private Point {field.java_name};",
        f"// {FIELD_REGION.end}",
    ])


def render_accessors(field: FieldDefinition) -> str:
    """Getter/setter pair exchanging the point as WKT text."""
    attr = field.java_name
    suffix = upper_first(attr)
    return "\n".join([
        f"// {FUNCTIONS_REGION.start} - don't remove",
        f"public String get{suffix}() {{",
        f"    return {attr} != null ? {attr}.toText() : null;",
        "}",
        "",
        f"public void set{suffix}(String wkt) {{",
        "    if (wkt == null || wkt.isEmpty()) {",
        f"        this.{attr} = null;",
        "        return;",
        "    }",
        "    try {",
        f"        this.{attr} = (Point) new WKTReader(new GeometryFactory()).read(wkt);",
        f"        this.{attr}.setSRID({SRID});",
        "    } catch (ParseException e) {",
        f'        throw new IllegalArgumentException("Invalid WKT point for {attr}: " + wkt, e);',
        "    }",
        "}",
        f"// {FUNCTIONS_REGION.end}",
    ])


def render_changelog_column(field: FieldDefinition) -> str:
    """Liquibase ``<column>`` for the geometry column."""
    lines = [f"<!-- {COLUMN_REGION.start} -->"]
    if field.required:
        lines += [
            f'<column name="{field.column_name}" type="{GEOMETRY_TYPE}">',
            '    <constraints nullable="false" />',
            "</column>",
        ]
    else:
        lines.append(f'<column name="{field.column_name}" type="{GEOMETRY_TYPE}"/>')
    lines.append(f"<!-- {COLUMN_REGION.end} -->")
    return "\n".join(lines)
