"""Unit tests for feature parser"""
from stepgrammar.parser.feature_parser import FeatureParser, StepType

FEATURE = '''
@regression
Feature: Checkout
  Buying items from the cart

  Background:
    Given Navigate to '/shop'

  @smoke
  Scenario: Pay by card
    When Click the Checkout button
    And Type '4111' into the Card field
    Then Verify the Receipt heading is displayed

  Scenario Outline: Apply coupons
    When Type '<code>' into the Coupon field
    Then Verify the Discount label reads '<amount>'

    Examples:
      | code   | amount |
      | SAVE10 | 10%    |
      | SAVE20 | 20%    |

  Scenario: Bulk add
    Given Set variable 'cart' to 'empty'
      | sku  | qty |
      | A100 | 2   |
'''


def _parse(tmp_path, text=FEATURE):
    path = tmp_path / 'checkout.feature'
    path.write_text(text, encoding='utf-8')
    return FeatureParser(str(tmp_path)).parse_features()


def test_feature_structure(tmp_path):
    features = _parse(tmp_path)

    assert len(features) == 1
    feature = features[0]
    assert feature.name == 'Checkout'
    assert feature.description == 'Buying items from the cart'
    assert feature.tags == ['@regression']
    assert [scenario.name for scenario in feature.scenarios] == ['Pay by card', 'Apply coupons', 'Bulk add']
    assert feature.background.steps[0].text == "Navigate to '/shop'"


def test_steps_keep_keyword_and_line(tmp_path):
    scenario = _parse(tmp_path)[0].scenarios[0]

    assert [step.keyword for step in scenario.steps] == [StepType.WHEN, StepType.AND, StepType.THEN]
    assert scenario.steps[0].text == 'Click the Checkout button'
    assert scenario.steps[0].line_number == 11


def test_tags_inherit_from_feature(tmp_path):
    scenarios = _parse(tmp_path)[0].scenarios

    assert scenarios[0].tags == ['@smoke', '@regression']
    assert scenarios[1].tags == ['@regression']


def test_examples_attach_to_their_outline(tmp_path):
    outline = _parse(tmp_path)[0].scenarios[1]

    assert outline.outline
    assert outline.examples == {
        'headers': ['code', 'amount'],
        'rows': [{'code': 'SAVE10', 'amount': '10%'}, {'code': 'SAVE20', 'amount': '20%'}],
    }

    expanded = outline.expanded_steps()
    assert [steps[0].text for steps in expanded] == ["Type 'SAVE10' into the Coupon field",
                                                     "Type 'SAVE20' into the Coupon field"]
    assert expanded[1][1].text == "Verify the Discount label reads '20%'"


def test_data_table_on_step(tmp_path):
    scenario = _parse(tmp_path)[0].scenarios[2]

    assert scenario.examples is None
    assert scenario.steps[0].data_table == [['sku', 'qty'], ['A100', '2']]
    assert scenario.expanded_steps() == [scenario.steps]


def test_tag_filter(tmp_path):
    path = tmp_path / 'checkout.feature'
    path.write_text(FEATURE, encoding='utf-8')

    features = FeatureParser(str(tmp_path)).parse_features(['@smoke'])

    assert [scenario.name for scenario in features[0].scenarios] == ['Pay by card']
    assert FeatureParser(str(tmp_path)).parse_features(['@missing']) == []


def test_single_file_path(tmp_path):
    path = tmp_path / 'checkout.feature'
    path.write_text(FEATURE, encoding='utf-8')

    features = FeatureParser(str(path)).parse_features()

    assert features[0].file_path == str(path)


def test_file_without_feature_line(tmp_path):
    assert _parse(tmp_path, "Scenario: orphan\n  Given Go back\n") == []


def test_empty_directory(tmp_path):
    assert FeatureParser(str(tmp_path)).parse_features() == []
