"""Classic example puzzles, keyed by id. Every one has exactly one solution."""

from typing import Dict

EXAMPLE_PUZZLES: Dict[str, str] = {
    "Q.1": """
  9
  *
---
 27
---
 27
""",
    "Q.2": """
 27
  *
---
**9
---
**9
""",
    "Q.6": """
  *1
  2*
----
 **3
*4*
----
****
""",
    "Q.7": """
 2*
 4*
---
 6*
*8
---
***
""",
    "two-by-two": """
 7*
 **
---
*5*
**
---
*3*
""",
    "Q.15": """
   *1**
   2***
-------
   *3**
 **4**
****5
***6
-------
****7**
""",
    "Q.17": """
      *1*****
       ******
-------------
      2*3****
    ********
   **4*5*6*
   *******
  ****7*8
********
-------------
*******9*****
""",
    "Q.22": """
                    ************************
                        ********************
--------------------------------------------
                   *********************9*0*
                  ********************8*1**
                  ******************7*2***
                ******************6*3****
               *****************5*4*****
               ***************4*5******
             ***************3*6*******
             *************2*7********
           *************1*8*********
           ***********0*9**********
         ***********9*0***********
        **********8*1************
        ********7*2*************
       *******6*3**************
      ******5*4***************
     *****4*5****************
    ****3*6*****************
  ****2*7******************
  **1*8*******************
**0*9********************
--------------------------------------------
********************************************
""",
}
