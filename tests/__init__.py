__description__ = "Test suite for str-merge"

TEST_CATEGORIES = {
    'alignment': 'Flank alignment and consensus tests',
    'block_store': 'Flank keys, merging and chain tests',
    'emitter': 'Filtering and rendering tests',
    'io': 'Annotated FASTQ reader tests',
    'config': 'Configuration and input validation tests',
    'integration': 'Integration and end-to-end tests',
}
