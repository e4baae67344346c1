"""
Generators — render the text this plugin splices into a JHipster app.

``point_field`` renders per-field snippets for the domain class and the
entity changelog.  ``module_files`` renders the one-time support files
(dialect, PostGIS changelog) as ``GeneratedFile`` instances.
"""
