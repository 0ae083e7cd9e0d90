def test_function_declaration_component(component_names):
    assert component_names("function Header() {\n  return <h1>제목</h1>;\n}\n") == ["Header"]


def test_lowercase_function_is_not_a_context(component_names):
    assert component_names("function helper() {\n  return <div />;\n}\n") == []


def test_component_without_markup_is_not_a_context(component_names):
    assert component_names("function Header() {\n  return null;\n}\n") == []


def test_arrow_function_takes_variable_name(component_names):
    source = "const Card = () => <div />;\nconst card = () => <div />;\n"
    assert component_names(source) == ["Card"]


def test_arrow_with_type_annotation(component_names):
    source = "const Card: React.FC<Props> = ({ title }) => {\n  return <div>{title}</div>;\n};\n"
    assert component_names(source) == ["Card"]


def test_named_function_expression(component_names):
    source = "const x = function Panel() {\n  return <div />;\n};\n"
    assert component_names(source) == ["Panel"]


def test_anonymous_functions_are_rejected(component_names):
    source = "export default () => <div />;\nfoo(function () { return <p />; });\n"
    assert component_names(source) == []


def test_arrow_not_directly_assigned_is_rejected(component_names):
    source = "const Memo = memo(() => <div />);\n"
    assert component_names(source) == []


def test_fragment_counts_as_markup(component_names):
    source = "export default function App() {\n  return <></>;\n}\n"
    assert component_names(source) == ["App"]


def test_nested_contexts_are_collected_independently(component_names):
    source = (
        "function Outer() {\n"
        "  const Inner = () => <span />;\n"
        "  return <div><Inner /></div>;\n"
        "}\n"
    )
    assert component_names(source) == ["Outer", "Inner"]


def test_markup_only_in_nested_helper_still_counts(component_names):
    source = (
        "function List({ items }) {\n"
        "  return items.map((item) => <li key={item}>{item}</li>);\n"
        "}\n"
    )
    assert component_names(source) == ["List"]


def test_hooks_are_contexts_only_on_request(component_names):
    source = 'function useTitle() {\n  return "제목";\n}\nfunction user() {\n  return 1;\n}\n'
    assert component_names(source) == []
    assert component_names(source, include_hooks=True) == ["useTitle"]


def test_javascript_dialect(component_names):
    source = "export function Button() {\n  return <button>확인</button>;\n}\n"
    assert component_names(source, dialect="javascript") == ["Button"]
