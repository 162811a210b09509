from pylox.errors import LoxTypeError, UndefinedPropertyError


def test_class_and_instance_print(run):
    assert run("class Bagel {} print Bagel; print Bagel();"
               ) == ["Bagel", "Bagel instance"]


def test_fields(run):
    assert run("""
    class Box {}
    var box = Box();
    box.value = 1;
    box.value = box.value + 1;
    print box.value;
    """) == ["2"]


def test_methods_bind_this(run):
    assert run("""
    class Person {
      greet() { print "hi " + this.name; }
    }
    var p = Person();
    p.name = "ann";
    var greet = p.greet;
    p.name = "bob";
    greet();
    print greet;
    """) == ["hi bob", "<fn greet>"]


def test_fields_shadow_methods(run):
    assert run("""
    class A { f() { return "method"; } }
    var a = A();
    fun other() { return "field"; }
    a.f = other;
    print a.f();
    """) == ["field"]


def test_initializer_runs_and_returns_instance(run):
    assert run("""
    class Point {
      init(x, y) { this.x = x; this.y = y; }
    }
    var p = Point(1, 2);
    print p.x + p.y;
    print p.init(3, 4);
    print p.x;
    """) == ["3", "Point instance", "3"]


def test_bare_return_in_initializer_returns_this(run):
    assert run("""
    class A {
      init(flag) { this.flag = flag; if (flag) return; this.flag = "late"; }
    }
    print A(true).flag;
    print A(false).flag;
    var a = A(true);
    print a.init(true) == a;
    """) == ["true", "late", "true"]


def test_class_without_init_is_constructible(run):
    assert run("class A {} var a = A(); print a;") == ["A instance"]


def test_constructor_arity(run_error):
    _, error = run_error("class A { init(a) {} } A();")
    assert error.message == "Expected 1 arguments but got 0."


def test_methods_can_reference_their_class(run):
    assert run("""
    class Node {
      make() { return Node(); }
    }
    print Node().make();
    """) == ["Node instance"]


def test_subclass_methods_win(run):
    assert run("""
    class A { f() { print "A"; } g() { print "A.g"; } }
    class B < A { f() { print "B"; } }
    B().f();
    B().g();
    """) == ["B", "A.g"]


def test_super_dispatches_statically(run):
    assert run("""
    class A { f() { print "A"; } }
    class B < A { f() { print "B"; super.f(); } }
    class C < B {}
    C().f();
    """) == ["B", "A"]


def test_super_binds_current_this(run):
    assert run("""
    class A { describe() { return "I am " + this.name; } }
    class B < A {
      init(name) { this.name = name; }
      describe() { return super.describe() + "!"; }
    }
    print B("b").describe();
    """) == ["I am b!"]


def test_inherited_initializer(run):
    assert run("""
    class A { init(v) { this.v = v; } }
    class B < A { init(v) { super.init(v * 2); } }
    print B(2).v;
    class C < A {}
    print C(5).v;
    """) == ["4", "5"]


def test_super_method_can_be_stored(run):
    assert run("""
    class A { f() { return "A.f"; } }
    class B < A { get() { return super.f; } }
    var f = B().get();
    print f();
    """) == ["A.f"]


def test_superclass_must_be_a_class(run_error):
    _, error = run_error("var NotAClass = 1; class A < NotAClass {}")
    assert isinstance(error, LoxTypeError)
    assert error.message == "Superclass must be a class."


def test_undefined_property(run_error):
    _, error = run_error("class A {} A().missing;")
    assert isinstance(error, UndefinedPropertyError)
    assert error.message == "Undefined property 'missing'."


def test_undefined_super_method(run_error):
    _, error = run_error("""
    class A {}
    class B < A { f() { return super.nope(); } }
    B().f();
    """)
    assert isinstance(error, UndefinedPropertyError)
    assert error.message == "Undefined property 'nope'."


def test_only_instances_have_properties(run_error):
    _, error = run_error('"str".length;')
    assert isinstance(error, LoxTypeError)
    assert error.message == "Only instances have properties."


def test_only_instances_have_fields(run_error):
    _, error = run_error("var n = 1; n.x = 2;")
    assert isinstance(error, LoxTypeError)
    assert error.message == "Only instances have fields."


def test_classes_in_local_scope(run):
    assert run("""
    {
      class A { f() { return "local A"; } }
      class B < A { f() { return super.f() + " via B"; } }
      print B().f();
    }
    """) == ["local A via B"]
