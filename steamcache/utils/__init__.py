"""Support code: message catalog, resource paths and tree rendering."""
