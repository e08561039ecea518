"""Generate RAML type libraries from Salesforce object metadata and specification CSVs."""

__version__ = "0.1.0"