CHAIN_GRAMMAR = r"""
    start: symbol

    // --- CANONICAL FORM ---
    //   Name | Name<Arg, Arg, ...>
    // The friendly form may put a signed decimal wherever an Int goes.
    symbol: NAME                                -> leaf
          | NAME "<" symbol ("," symbol)* ">"  -> node
          | SIGNED_INT                         -> literal

    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    %import common.SIGNED_INT
    %import common.WS
    %ignore WS
"""
