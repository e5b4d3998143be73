"""Mapping grammar rules: field mapping files, data transformation and test data preparation"""
from stepgrammar.grammars.extractors import Q, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

MAPPING_RULES = [
    GrammarRule(
        id='map-load',
        pattern=rf'^load\s+mapping\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.LOAD_MAPPING,
        priority=750,
        extract=mapped(params={'mappingFile': LiteralRef(1)}),
        examples=["Load mapping file 'config/field-mappings.yml'",
                  "Load mapping file 'test-data/column-map.json'"],
    ),
    GrammarRule(
        id='map-load-sheet',
        pattern=rf'^load\s+mapping\s+file\s+{Q}\s+sheet\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.LOAD_MAPPING,
        priority=751,
        extract=mapped(params={'mappingFile': LiteralRef(1), 'mappingSheet': LiteralRef(2)}),
        examples=["Load mapping file 'config/mappings.xlsx' sheet 'Fields'"],
    ),
    GrammarRule(
        id='map-transform',
        pattern=rf'^transform\s+context\s+{Q}\s+using\s+mapping\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.TRANSFORM_DATA,
        priority=760,
        # the mapping is addressed by the name it was loaded under
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'targetContextVar': LiteralRef(2)}),
        examples=["Transform context 'dbData' using mapping 'fieldMap'",
                  "Transform context 'rawRecords' using mapping 'columnMapping'"],
    ),
    GrammarRule(
        id='map-transform-file',
        pattern=rf'^transform\s+context\s+{Q}\s+using\s+mapping\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.TRANSFORM_DATA,
        priority=761,
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'mappingFile': LiteralRef(2)}),
        examples=["Transform context 'dbRecord' using mapping file 'config/db-to-ui.yml'"],
    ),
    GrammarRule(
        id='map-prepare-data',
        pattern=rf'^prepare\s+test\s+data\s+using\s+mapping\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PREPARE_TEST_DATA,
        priority=770,
        extract=mapped(params={'mappingFile': LiteralRef(1)}),
        examples=["Prepare test data using mapping file 'test-data/create-record.yml'"],
    ),
    GrammarRule(
        id='map-prepare-data-context',
        pattern=rf'^prepare\s+test\s+data\s+using\s+mapping\s+file\s+{Q}\s+with\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PREPARE_TEST_DATA,
        priority=771,
        extract=mapped(params={'mappingFile': LiteralRef(1), 'sourceContextVar': LiteralRef(2)}),
        examples=["Prepare test data using mapping file 'test-data/edit-record.yml' "
                  "with context 'existingRecord'"],
    ),
]

MAPPING_TABLE = GrammarTable('mapping', (750, 799), MAPPING_RULES)
