# xraml

xraml builds RAML 1.0 type libraries from Salesforce custom object metadata
(`*.object` XML files). A field specification sheet exported as CSV decides
which fields go into the library. Only the fields marked as required (`〇`)
in the sheet are written out.

It uses only the standard library.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

Run the tool from a working directory that has a `data/` folder holding
these files:

- `data/kobetu.csv` and `data/IndividualContract__c.object`
- `data/keiyaku.csv` and `data/SalesOrderEmploymentConditions__c.object`

Then run:

```
xraml
```

The command takes no options apart from `--help`. It writes
`data/individual_contract.raml` and
`data/sales_order_employment_conditions.raml`. For each sheet it prints the
column indexes it found (`target_columns: [...]`), and for each output file the
number of types written (`types of <file>: <n>`). If a file is missing, cannot
be parsed or has an unexpected layout, it prints `Error: ...` to standard error
and exits with status 1.

## Library use

```python
from xraml.spec_csv import read_as_csv
from xraml.raml import create_raml_metadata_stream

spec = read_as_csv("data/kobetu.csv")
required = spec.acquire_required_rows_name()

stream = create_raml_metadata_stream("data/IndividualContract__c.object")
stream.create_raml_file_minimal(required, "individual_contract.raml")
```

### `xraml.fileio`

- `read_file(path)` returns the UTF-8 text of a file with its line endings
  unchanged.

### `xraml.spec_csv`

- `read_as_csv(path)` parses a specification sheet into a `Csv`. The item list
  starts after the line that contains `項目一覧`. The header runs up to the
  first line that contains `CSV`. Columns whose header contains `CSV` or
  `API参照名` become `Csv.target_columns`. A sheet without `項目一覧` raises
  `CsvFormatError`, which is a `ValueError`.
- `CsvRows` yields the item rows as lists of cells. These are the rows whose
  first cell is empty and whose second cell is an integer.
- `Csv.acquire_required_rows_name()` returns the API name (the first target
  column) of every row that has `〇` in any cell from the second target column
  onwards. `Csv.filter_map(condition)` is the general form: it keeps every
  result of `condition(row)` that is not `None`.
- `Csv.update_property_file_content(content)` appends `name,` lines for
  required fields to the text of a property file. `Csv.update_property_file()`
  does the same to `data/property.csv` on disk and returns the new content.
- `property_file_line_format(name, example=None)` formats a single
  `name,example` line.
- `open_property_file(read, write)`, `read_property_file()` and
  `write_property_file(content)` work on `data/property.csv`. Opening it for
  writing creates the file but does not truncate it. Passing `False` for both
  `read` and `write` raises `ValueError`.

### `xraml.raml`

- `parse_from_path(path)` parses an object file. `get_custom_object(doc)`
  returns its top element. `get_all_column_metadata(doc)` returns its
  `fields` elements.
- `RamlTypesMetadata.from_node(element)` reads a `fields` element, mapping the
  field type as follows:
  - `Lookup` becomes a `string` with an 18-character example.
  - `Picklist` becomes an enumeration of strings.
  - `Number` becomes `number` with example `0`.
  - `Checkbox` becomes `boolean` with example `true`.
  - `Date` becomes `date`.
  - Anything else becomes a `string` with example `"XXX"`.

  Any other element raises `NotAFieldsNode`.
- `RamlTypesMetadata.format_as_raml()` renders one type entry with its type,
  description (the field label), enum values and example.
- `RamlTypesMetadata.set_enum_variant(elements)` fills an enumeration from the
  `picklistValues` elements of the object's record types. The values are
  URL-decoded, and the first value becomes the example.
- `RamlType` and `RamlKind` describe the RAML type of a field.
- `RamlMetadataStream.from_document(doc)` and
  `create_raml_metadata_stream(path)` collect one `RamlTypesMetadata` for each
  `fields` element, in document order. A stream can be iterated and narrowed
  with `filter(predicate)` or `filter_required_rows(names)`.
- `RamlMetadataStream.create_raml_file(filename)` writes the stream to
  `data/<filename>`. `create_raml_file_minimal(names, filename)` writes only
  the named fields there. `create_raml_file(stream, path)` writes to any path.

Every generated file starts with the `#%RAML 1.0 Library` header and a
`types:` section.

## Limits

- The command always uses the fixed file names listed above.
- The generated types have no `maxLength` or `required` facets. Field lengths
  and required flags are read into `RamlTypesMetadata` but are not written out.