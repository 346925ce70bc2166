"""
Test Data Factory — Go source units for tfsnip tests

Provides realistic Terraform resource sources and a small factory that
writes them to disk or parses them with the real tree-sitter parser.

Usage:
    def test_something(go_factory):
        unit = go_factory.parse(EXAMPLE_THING)

    def test_builder(go_factory):
        unit = go_factory.parse(go_resource("resourceX", '"a": &schema.Schema{...},'))
"""

from pathlib import Path
from textwrap import dedent
from typing import Optional


EXAMPLE_THING = dedent('''\
    package example

    import (
    	"github.com/hashicorp/terraform/helper/schema"
    )

    func resourceExampleThing() *schema.Resource {
    	return &schema.Resource{
    		Create: resourceExampleThingCreate,
    		Read:   resourceExampleThingRead,

    		Schema: map[string]*schema.Schema{
    			"name": &schema.Schema{
    				Type:     schema.TypeString,
    				Optional: true,
    			},

    			// Set by the API
    			"id": &schema.Schema{
    				Type:     schema.TypeString,
    				Computed: true,
    			},

    			"tags": tagsSchema(),
    		},
    	}
    }

    func resourceExampleThingCreate(d *schema.ResourceData, meta interface{}) error {
    	return nil
    }

    func resourceExampleThingRead(d *schema.ResourceData, meta interface{}) error {
    	return nil
    }
''')


MIXED_FIELDS = dedent('''\
    package example

    import "github.com/hashicorp/terraform/helper/schema"

    func resourceExampleMixed() *schema.Resource {
    	return &schema.Resource{
    		Schema: map[string]*schema.Schema{
    			"ami": &schema.Schema{
    				Type:     schema.TypeString,
    				Required: true,
    				ForceNew: true,
    			},
    			"arn": &schema.Schema{
    				Type:     schema.TypeString,
    				Computed: true,
    			},
    			"subnet_id": &schema.Schema{
    				Type:     schema.TypeString,
    				Optional: true,
    				Computed: true,
    			},
    			"user_data": &schema.Schema{
    				Type:        schema.TypeString,
    				Optional:    true,
    				ForceNew:    true,
    				Description: "cloud-init script",
    				StateFunc:   hashUserData,
    			},
    			"no_marker": &schema.Schema{
    				Optional: true,
    			},
    			"ebs_block_device": &schema.Schema{
    				Type:     schema.TypeSet,
    				Optional: true,
    				Elem: &schema.Resource{
    					Schema: map[string]*schema.Schema{
    						"device_name": &schema.Schema{
    							Type:     schema.TypeString,
    							Required: true,
    						},
    					},
    				},
    			},
    			"security_groups": &schema.Schema{
    				Type:     schema.TypeSet,
    				Optional: true,
    				Elem:     &schema.Schema{Type: schema.TypeString},
    			},
    			"elided": {
    				Type:     schema.TypeString,
    				Optional: true,
    			},
    			"tags": &schema.Schema{
    				Type:     schema.TypeMap,
    				Optional: true,
    			},
    		},
    	}
    }
''')


# A declaration function that delegates instead of returning a literal
SHARED_SCHEMA = (
    "package example\n\n"
    "func resourceExampleShared() *schema.Resource {\n"
    "\treturn resourceExampleBase()\n"
    "}\n"
)


def go_resource(function_name: str, fields: str, package: str = "example") -> str:
    """
    Build a resource source unit around a block of schema entries.

    Args:
        function_name: Declaration function name (resourceExampleThing)
        fields: Go source of the map entries, one per line
    """
    indented = "\n".join(
        ("\t\t\t" + line) if line.strip() else line
        for line in dedent(fields).strip("\n").splitlines()
    )
    return (
        f"package {package}\n\n"
        f'import "github.com/hashicorp/terraform/helper/schema"\n\n'
        f"func {function_name}() *schema.Resource {{\n"
        f"\treturn &schema.Resource{{\n"
        f"\t\tSchema: map[string]*schema.Schema{{\n"
        f"{indented}\n"
        f"\t\t}},\n"
        f"\t}}\n"
        f"}}\n"
    )


class GoSourceFactory:
    """
    Writes and parses Go source units under a temporary directory.
    """

    def __init__(self, root: Path):
        self.root = root
        self._parser = None

    @property
    def parser(self):
        from tfsnip.core.parsing import SourceParser
        if self._parser is None:
            self._parser = SourceParser()
        return self._parser

    def parse(self, source: str):
        """Parse source text into a SourceUnit."""
        return self.parser.parse(source.encode("utf-8"))

    def write(self, name: str, source: str, directory: Optional[Path] = None) -> Path:
        """Write a source unit and return its path."""
        directory = directory or self.root
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(source, encoding="utf-8")
        return path
